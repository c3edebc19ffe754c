import pytest

from storefront.cms_defaults import ABOUT_PAGE
from storefront.content_editor import (
    ContentEditor,
    get_path,
    merge_with_defaults,
    read_page_content,
    set_path,
    upsert_page_content,
)
from storefront.exceptions import ContentPathError, ContentSaveError
from storefront.models import CMSPage


# --------------------------
# Dot-paths
# --------------------------

def test_set_path_creates_missing_objects():
    assert set_path({}, "hero.heading", "Hi") == {"hero": {"heading": "Hi"}}


def test_set_path_does_not_mutate_input():
    original = {"hero": {"heading": "Old", "subheading": "Keep"}}
    updated = set_path(original, "hero.heading", "New")
    assert original["hero"]["heading"] == "Old"
    assert updated == {"hero": {"heading": "New", "subheading": "Keep"}}


def test_set_path_rejects_scalar_in_the_middle():
    with pytest.raises(ContentPathError) as exc:
        set_path({"hero": "text"}, "hero.heading", "x")
    assert exc.value.segment == "hero"


def test_set_path_list_indices():
    content = {"core_values": [{"title": "A"}, {"title": "B"}]}
    updated = set_path(content, "core_values.1.title", "Quality")
    assert updated["core_values"][1] == {"title": "Quality"}
    assert content["core_values"][1] == {"title": "B"}

    appended = set_path(content, "core_values.2", {"title": "C"})
    assert len(appended["core_values"]) == 3

    with pytest.raises(ContentPathError):
        set_path(content, "core_values.9.title", "x")


def test_get_path():
    content = {"a": {"b": [{"c": 1}]}}
    assert get_path(content, "a.b.0.c") == 1
    assert get_path(content, "a.x", "dflt") == "dflt"
    assert get_path(content, "a.b.5.c") is None


def test_merge_with_defaults():
    default = {"hero": {"heading": "D", "subheading": "DS"}, "items": [1, 2]}
    stored = {"hero": {"heading": "S"}, "items": [], "extra": True}
    merged = merge_with_defaults(default, stored)
    assert merged == {"hero": {"heading": "S", "subheading": "DS"}, "items": [1, 2], "extra": True}
    assert merge_with_defaults(default, None) == default


# --------------------------
# Editor lifecycle
# --------------------------

@pytest.mark.django_db
def test_missing_row_loads_the_default_shape():
    editor = ContentEditor("about_page")
    content = editor.load()
    assert content == ABOUT_PAGE
    assert content is not ABOUT_PAGE
    assert editor.is_loaded and not editor.is_dirty


def test_loader_failure_falls_back_to_default():
    def broken(page_key):
        raise RuntimeError("db down")

    editor = ContentEditor("x_page", default={"a": 1}, loader=broken)
    assert editor.load() == {"a": 1}


def test_load_runs_once():
    calls = []

    def loader(page_key):
        calls.append(page_key)
        return {"a": 1}

    editor = ContentEditor("x_page", loader=loader)
    editor.load()
    editor.load()
    editor.get("a")
    assert calls == ["x_page"]


def test_submit_failure_keeps_local_edits():
    def failing_saver(page_key, content):
        raise RuntimeError("write failed")

    editor = ContentEditor("x_page", default={}, loader=lambda key: None, saver=failing_saver)
    editor.update("hero.heading", "Unsaved")

    with pytest.raises(ContentSaveError):
        editor.submit()
    assert editor.content == {"hero": {"heading": "Unsaved"}}
    assert editor.is_dirty
    assert not editor.is_saving


@pytest.mark.django_db
def test_submit_persists_and_refreshes_cached_read():
    upsert_page_content("quality_page", {"hero": {"heading": "First"}})
    assert read_page_content("quality_page") == {"hero": {"heading": "First"}}

    editor = ContentEditor("quality_page")
    editor.update("hero.heading", "Second")
    editor.submit()

    assert not editor.is_dirty
    assert CMSPage.objects.get(page_key="quality_page").content == {"hero": {"heading": "Second"}}
    assert read_page_content("quality_page") == {"hero": {"heading": "Second"}}


@pytest.mark.django_db
def test_deleting_a_row_drops_the_cached_copy():
    upsert_page_content("contact_page", {"form_heading": "Talk to us"})
    assert read_page_content("contact_page") is not None
    CMSPage.objects.filter(page_key="contact_page").first().delete()
    assert read_page_content("contact_page") is None
