"""Tests for tree rendering."""

import asyncio
from dataclasses import replace

import pytest

from waypoint_engine.settings.model import FolderNoteType, Settings
from waypoint_engine.tree.ordering import natural_key
from waypoint_engine.tree.renderer import TreeRenderer, encoded_uri
from waypoint_engine.vault.nodes import Document, Folder

WAYPOINT = "%% Waypoint %%"
LANDMARK = "%% Landmark %%"


def render(vault, folder_path: str, settings: Settings | None = None) -> str:
    renderer = TreeRenderer(vault, settings or Settings())
    return asyncio.run(renderer.render_block(Folder(folder_path)))


class TestBasicRendering:
    def test_files_and_subfolders(self, make_vault):
        vault = make_vault({
            "A/A.md": WAYPOINT,
            "A/note1.md": "",
            "A/Sub/x.md": "",
        })
        assert render(vault, "A") == "- [[note1]]\n- **Sub**\n\t- [[x]]"

    def test_render_is_idempotent(self, make_vault):
        vault = make_vault({
            "A/A.md": WAYPOINT,
            "A/one.md": "",
            "A/Two/three.md": "",
            "A/Two/Four/five.md": "",
        })
        assert render(vault, "A") == render(vault, "A")

    def test_empty_folder_renders_name_only(self, make_vault):
        vault = make_vault({"A/A.md": WAYPOINT, "A/Empty/": ""})
        assert render(vault, "A") == "- **Empty**"

    def test_top_folder_with_nothing_renders_empty(self, make_vault):
        vault = make_vault({"A/A.md": WAYPOINT})
        assert render(vault, "A") == ""

    def test_subfolder_with_note_is_bold_link(self, make_vault):
        vault = make_vault({
            "A/A.md": WAYPOINT,
            "A/Sub/Sub.md": "plain note",
            "A/Sub/child.md": "",
        })
        assert render(vault, "A") == "- **[[Sub]]**\n\t- [[child]]"

    def test_space_indentation(self, make_vault):
        vault = make_vault({"A/A.md": WAYPOINT, "A/Sub/x.md": ""})
        settings = Settings(use_spaces=True, num_spaces=4)
        assert render(vault, "A", settings) == "- **Sub**\n    - [[x]]"


class TestBoundaryRule:
    def test_landmark_does_not_stop_descent(self, make_vault):
        vault = make_vault({
            "A/A.md": WAYPOINT,
            "A/B/B.md": LANDMARK,
            "A/B/C/file.md": "",
        })
        assert render(vault, "A") == "- **[[B]]**\n\t- **C**\n\t\t- [[file]]"

    def test_waypoint_stops_descent(self, make_vault):
        vault = make_vault({
            "A/A.md": WAYPOINT,
            "A/B/B.md": WAYPOINT,
            "A/B/C/file.md": "",
        })
        out = render(vault, "A")
        assert out == "- **[[B]]**"
        assert "file" not in out

    def test_generated_waypoint_block_stops_descent(self, make_vault):
        vault = make_vault({
            "A/A.md": WAYPOINT,
            "A/B/B.md": "%% Begin Waypoint %%\n- [[x]]\n\n%% End Waypoint %%",
            "A/B/x.md": "",
        })
        assert render(vault, "A") == "- **[[B]]**"

    def test_stop_at_every_folder_note(self, make_vault):
        vault = make_vault({
            "A/A.md": WAYPOINT,
            "A/B/B.md": LANDMARK,
            "A/B/C/file.md": "",
        })
        settings = Settings(stop_scan_at_folder_notes=True)
        assert render(vault, "A", settings) == "- **[[B]]**"


class TestOrdering:
    def test_numeric_aware_order(self, make_vault):
        vault = make_vault({
            "A/A.md": WAYPOINT,
            "A/Ch10.md": "",
            "A/Ch2.md": "",
            "A/Ch1.md": "",
        })
        assert render(vault, "A") == "- [[Ch1]]\n- [[Ch2]]\n- [[Ch10]]"

    def test_priority_sorts_first(self, make_vault):
        vault = make_vault({
            "A/A.md": WAYPOINT,
            "A/alpha.md": "",
            "A/zeta.md": "---\nwaypointPriority: 1\n---\nbody",
        })
        assert render(vault, "A") == "- [[zeta]]\n- [[alpha]]"

    def test_folder_priority_comes_from_its_note(self, make_vault):
        vault = make_vault({
            "A/A.md": WAYPOINT,
            "A/alpha.md": "",
            "A/Zed/Zed.md": "---\nwaypointPriority: 0\n---\n",
        })
        assert render(vault, "A") == "- **[[Zed]]**\n- [[alpha]]"

    def test_priority_ties_break_by_name(self, make_vault):
        vault = make_vault({
            "A/A.md": WAYPOINT,
            "A/b.md": "---\nwaypointPriority: 2\n---\n",
            "A/a.md": "---\nwaypointPriority: 2\n---\n",
            "A/c.md": "---\nwaypointPriority: 1\n---\n",
        })
        assert render(vault, "A") == "- [[c]]\n- [[a]]\n- [[b]]"

    def test_natural_key_is_case_and_accent_insensitive(self):
        assert natural_key("Étude") == natural_key("etude")
        assert sorted(["b", "A", "c"], key=natural_key) == ["A", "b", "c"]


class TestFiltering:
    def test_ignored_paths_never_render(self, make_vault):
        vault = make_vault({
            "A/A.md": WAYPOINT,
            "A/_attachments/img.md": "",
            "A/keep.md": "",
        })
        assert render(vault, "A") == "- [[keep]]"

    def test_ignored_children_leave_folder_empty(self, make_vault):
        vault = make_vault({
            "A/A.md": WAYPOINT,
            "A/Sub/_attachments/a.md": "",
        })
        assert render(vault, "A") == "- **Sub**"

    def test_custom_ignore_pattern(self, make_vault):
        vault = make_vault({
            "A/A.md": WAYPOINT,
            "A/draft-1.md": "",
            "A/final.md": "",
        })
        settings = Settings(ignore_paths=(r"draft-\d",))
        assert render(vault, "A", settings) == "- [[final]]"

    def test_non_markdown_hidden_by_default(self, make_vault):
        vault = make_vault({"A/A.md": WAYPOINT, "A/image.png": "x"})
        assert render(vault, "A") == ""

    def test_non_markdown_shown_when_enabled(self, make_vault):
        vault = make_vault({"A/A.md": WAYPOINT, "A/image.png": "x"})
        settings = Settings(show_non_markdown_files=True)
        assert render(vault, "A", settings) == "- [[image.png]]"

    def test_show_folder_notes(self, make_vault):
        vault = make_vault({"A/A.md": WAYPOINT, "A/Sub/Sub.md": "", "A/Sub/x.md": ""})
        settings = Settings(show_folder_notes=True)
        assert render(vault, "A", settings) == "- [[A]]\n- **[[Sub]]**\n\t- [[Sub]]\n\t- [[x]]"


class TestLinks:
    def test_path_style_links_are_encoded_and_relative(self, make_vault):
        vault = make_vault({"A/A.md": WAYPOINT, "A/Sub Folder/My Note.md": ""})
        settings = Settings(use_wiki_links=False)
        assert render(vault, "A", settings) == (
            "- **Sub Folder**\n\t- [My Note](./Sub%20Folder/My%20Note.md)"
        )

    def test_encoded_uri_outside_root(self):
        assert encoded_uri(Folder("A"), Document("A.md")) == "./../A.md"

    def test_front_matter_title(self, make_vault):
        vault = make_vault({
            "A/A.md": WAYPOINT,
            "A/note.md": "---\ntitle: Nice Title\n---\n",
        })
        assert render(vault, "A", Settings(use_front_matter_title=True)) == "- [[note|Nice Title]]"
        assert render(vault, "A") == "- [[note]]"

    def test_front_matter_title_path_style(self, make_vault):
        vault = make_vault({
            "A/A.md": WAYPOINT,
            "A/note.md": "---\ntitle: Nice Title\n---\n",
        })
        settings = Settings(use_front_matter_title=True, use_wiki_links=False)
        assert render(vault, "A", settings) == "- [Nice Title](./note.md)"


class TestEnclosingNote:
    def test_enclosing_note_line_is_shown(self, make_vault):
        vault = make_vault({"A/A.md": WAYPOINT, "A/x.md": ""})
        settings = Settings(show_enclosing_note=True)
        assert render(vault, "A", settings) == "- **[[A]]**\n\t- [[x]]"

    def test_enclosing_note_does_not_stop_at_itself(self, make_vault):
        vault = make_vault({"A/A.md": WAYPOINT, "A/Sub/x.md": ""})
        settings = Settings(show_enclosing_note=True, stop_scan_at_folder_notes=True)
        assert render(vault, "A", settings) == "- **[[A]]**\n\t- **Sub**\n\t\t- [[x]]"


class TestOutsideConvention:
    @pytest.fixture
    def settings(self):
        return replace(Settings(), folder_note_type=FolderNoteType.OUTSIDE_FOLDER)

    def test_sibling_notes_are_folded_into_folder_lines(self, make_vault, settings):
        vault = make_vault({
            "A.md": WAYPOINT,
            "A/B.md": "",
            "A/B/x.md": "",
            "A/loose.md": "",
        })
        assert render(vault, "A", settings) == "- **[[B]]**\n\t- [[x]]\n- [[loose]]"

    def test_waypoint_in_outside_note_stops_descent(self, make_vault, settings):
        vault = make_vault({
            "A.md": WAYPOINT,
            "A/B.md": WAYPOINT,
            "A/B/x.md": "",
        })
        assert render(vault, "A", settings) == "- **[[B]]**"
