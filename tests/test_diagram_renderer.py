"""Tests for Mermaid rendering, diagram validation and bullet degradation."""

import re
from datetime import date

import pytest

from noteorganizer.models import DiagramKind
from noteorganizer.processing.diagram_renderer import (
    degrade_to_bullets,
    detect_diagram_kind,
    node_id,
    render_diagram,
    render_flowchart,
    render_mindmap,
    render_simple,
    render_timeline,
    truncate_label,
    validate_diagram,
)

NODE_RE = re.compile(r"^\s+([A-Z])\[", re.MULTILINE)
EDGE_RE = re.compile(r"^\s+([A-Z]) --> ([A-Z])$", re.MULTILINE)

PROCESS_NOTES = "first user enters email\nthen creates password\nfinally account activated"


class TestNodeIds:
    def test_sequential_letters(self):
        assert [node_id(i) for i in range(3)] == ["A", "B", "C"]
        assert node_id(25) == "Z"

    @pytest.mark.parametrize("index", [-1, 26, 100])
    def test_out_of_range(self, index):
        with pytest.raises(ValueError):
            node_id(index)


class TestTruncateLabel:
    def test_short_label_unchanged(self):
        assert truncate_label("short", 20) == "short"

    def test_long_label_cut_with_ellipsis(self):
        assert truncate_label("first user enters email", 20) == "first user enters em..."


class TestRenderFlowchart:
    def test_three_steps(self):
        dsl = render_flowchart(PROCESS_NOTES)

        assert dsl.startswith("flowchart TD\n")
        assert NODE_RE.findall(dsl) == ["A", "B", "C"]
        assert EDGE_RE.findall(dsl) == [("A", "B"), ("B", "C")]
        assert '  A["first user enters em..."]' in dsl

    def test_caps_node_count(self):
        text = "\n".join(f"step {i}" for i in range(30))
        dsl = render_flowchart(text, max_nodes=10)

        assert NODE_RE.findall(dsl) == list("ABCDEFGHIJ")
        assert len(EDGE_RE.findall(dsl)) == 9

    def test_full_alphabet(self):
        text = "\n".join(f"step {i}" for i in range(40))
        dsl = render_flowchart(text, max_nodes=26)
        assert NODE_RE.findall(dsl)[-1] == "Z"

    def test_quotes_in_labels(self):
        dsl = render_flowchart('click "save"\nthen wait')
        assert "\"click 'save'\"" in dsl

    def test_single_line_has_no_edges(self):
        dsl = render_flowchart("only step")
        assert EDGE_RE.findall(dsl) == []


class TestRenderSimple:
    def test_chain(self):
        assert render_simple("apples\nbananas\ncherries") == (
            "graph TD\n"
            '  A["apples"]\n'
            '  B["bananas"]\n'
            "  A --> B\n"
            '  C["cherries"]\n'
            "  B --> C\n"
        )


class TestRenderMindmap:
    def test_branches(self):
        text = (
            "company structure\n"
            "engineering team has five people\n"
            "marketing budget is small\n"
            "quarterly goals defined\n"
            "office moves soon"
        )
        assert render_mindmap(text) == (
            "mindmap\n"
            "  root((company structure))\n"
            "    Team\n"
            "      engineering team has five people\n"
            "    Budget\n"
            "      marketing budget is small\n"
            "    Goals\n"
            "      quarterly goals defined\n"
            "    General\n"
            "      office moves soon\n"
        )

    def test_strips_shape_characters(self):
        dsl = render_mindmap("plan (draft)\nteam [core]")
        assert "root((plan  draft))" in dsl
        assert "team  core" in dsl

    def test_empty(self):
        assert render_mindmap("") == "mindmap\n"

    def test_branch_headings_count_toward_node_cap(self):
        text = "company structure\nteam alpha\nbudget line\ngoals list\ntasks list\nother thing"
        dsl = render_mindmap(text, max_nodes=3)

        assert dsl == "mindmap\n  root((company structure))\n    Team\n      team alpha\n"

    @pytest.mark.parametrize("max_nodes", [1, 2, 4, 5, 7, 10])
    def test_never_exceeds_node_cap(self, max_nodes):
        text = "company structure\nteam alpha\nbudget line\ngoals list\ntasks list\nother thing\nteam beta"
        dsl = render_mindmap(text, max_nodes=max_nodes)

        assert len(dsl.splitlines()) - 1 <= max_nodes


class TestRenderTimeline:
    def test_dated_bars(self):
        text = "launch schedule\nbeta release 15/03/25\nlaunch party march 20\nwrap up"
        dsl = render_timeline(text, today=date(2026, 10, 19))

        assert dsl == (
            "gantt\n"
            "  title Timeline\n"
            "  dateFormat YYYY-MM-DD\n"
            "  section Events\n"
            "  launch schedule :t0, 2026-10-19, 2026-10-20\n"
            "  beta release :t1, 2025-03-15, 2025-03-16\n"
            "  launch party march 20 :t2, 2026-03-20, 2026-03-21\n"
            "  wrap up :t3, 2026-10-22, 2026-10-23\n"
        )

    def test_passes_validation(self):
        dsl = render_timeline("kickoff\nreview", today=date(2026, 1, 1))
        assert validate_diagram(dsl)

    def test_keyword_labels_stay_tasks(self):
        text = "release schedule\nsection two review\ntitle page redesign\nExcludes weekends"
        dsl = render_timeline(text, today=date(2026, 1, 1))

        assert "  Task section two review :t1, " in dsl
        assert "  Task title page redesign :t2, " in dsl
        assert "  Task Excludes weekends :t3, " in dsl
        assert dsl.count("section ") == 2
        assert validate_diagram(dsl)


class TestRenderDiagram:
    @pytest.mark.parametrize(
        ("kind", "header"),
        [
            (DiagramKind.FLOWCHART, "flowchart TD"),
            (DiagramKind.MINDMAP, "mindmap"),
            (DiagramKind.TIMELINE, "gantt"),
            (DiagramKind.NONE, "graph TD"),
        ],
    )
    def test_header_per_kind(self, kind, header):
        dsl = render_diagram("one\ntwo", kind, today=date(2026, 1, 1))
        assert dsl.splitlines()[0] == header
        assert validate_diagram(dsl)


class TestValidateDiagram:
    @pytest.mark.parametrize(
        "dsl",
        [
            "flowchart LR\n  A[Start] --> B[End]",
            "graph TD\n  A(Round)",
            "mindmap\n  root((Ideas))",
            "gantt\n  title T\n  dateFormat YYYY-MM-DD\n  section S\n  Task :a1, 2024-01-01, 1d",
            "timeline\n  2024 : launch",
        ],
    )
    def test_valid(self, dsl):
        assert validate_diagram(dsl)

    @pytest.mark.parametrize(
        "dsl",
        [
            "",
            "graph TD",
            "hello\n  A[x]",
            "flowchart TD\n  A --> B",
            "gantt\n  title Only",
        ],
    )
    def test_invalid(self, dsl):
        assert not validate_diagram(dsl)


class TestDetectDiagramKind:
    def test_kinds(self):
        assert detect_diagram_kind("graph TD\n  A[x]") == DiagramKind.FLOWCHART
        assert detect_diagram_kind("flowchart LR\n  A[x]") == DiagramKind.FLOWCHART
        assert detect_diagram_kind("mindmap\n  root((x))") == DiagramKind.MINDMAP
        assert detect_diagram_kind("timeline\n  2024 : x") == DiagramKind.TIMELINE
        assert detect_diagram_kind("pie\n  \"a\" : 1") is None


class TestDegradeToBullets:
    def test_keeps_labels_drops_edges(self):
        dsl = "flowchart TD\n  A[Start] --> B[End]\n  B --> C"
        assert degrade_to_bullets(dsl) == "- Start\n- End\n"

    def test_keeps_plain_lines(self):
        assert degrade_to_bullets("flowchart TD\n  A[Start\n  loose text") == (
            "- A[Start\n- loose text\n"
        )

    def test_empty(self):
        assert degrade_to_bullets("graph TD") == ""
