"""Settings endpoints: the API key and the smart-mode preference."""

from fastapi import APIRouter, HTTPException

from noteorganizer.api.dependencies import get_settings, get_state_store
from noteorganizer.models import CredentialRequest, CredentialStatus, Preferences

router = APIRouter(prefix="/api/v1/settings", tags=["settings"])


def _credential_status() -> CredentialStatus:
    settings = get_settings()
    stored = get_state_store().get_credential()
    key = stored or settings.api_key
    if stored:
        source = "stored"
    elif settings.api_key:
        source = "environment"
    else:
        source = None
    return CredentialStatus(
        present=bool(key),
        source=source,
        looks_valid=bool(key) and len(key or "") >= settings.min_api_key_length,
    )


@router.get("/credential", response_model=CredentialStatus)
async def get_credential() -> CredentialStatus:
    """Report whether an API key is available. The key itself is never returned."""
    return _credential_status()


@router.put("/credential", response_model=CredentialStatus)
async def save_credential(body: CredentialRequest) -> CredentialStatus:
    settings = get_settings()
    api_key = body.api_key.strip()
    if len(api_key) < settings.min_api_key_length:
        raise HTTPException(status_code=422, detail="API key looks too short")
    get_state_store().save_credential(api_key)
    return _credential_status()


@router.delete("/credential", response_model=CredentialStatus)
async def clear_credential() -> CredentialStatus:
    get_state_store().clear_credential()
    return _credential_status()


@router.get("/preferences", response_model=Preferences)
async def get_preferences() -> Preferences:
    settings = get_settings()
    return Preferences(smart_mode=get_state_store().get_smart_mode(default=settings.smart_mode))


@router.put("/preferences", response_model=Preferences)
async def update_preferences(body: Preferences) -> Preferences:
    get_state_store().set_smart_mode(body.smart_mode)
    return body
