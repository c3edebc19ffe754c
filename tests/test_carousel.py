from types import SimpleNamespace

from storefront.carousel import (
    DEFAULT_OVERLAY_OPACITY,
    POINTER_RESUME_DELAY_MS,
    CarouselController,
    CarouselState,
    first_present,
    resolve_slide_layout,
)
from storefront.pricing import PLACEHOLDER_IMAGE

SETTINGS = {
    "autoplay": True,
    "autoplay_interval": 5000,
    "pause_on_hover": True,
    "show_arrows": True,
    "show_dots": True,
}


def _mounted(slides=3, **overrides):
    c = CarouselController(slides, {**SETTINGS, **overrides})
    c.mount()
    return c


def test_autoplay_advances_once_per_interval():
    c = _mounted()
    assert c.state == CarouselState.AUTOPLAYING
    c.tick(4999)
    assert c.current == 0
    c.tick(1)
    assert c.current == 1
    c.tick(10000)
    assert c.current == 0  # wrapped


def test_single_slide_never_autoplays():
    c = _mounted(slides=1)
    assert c.state == CarouselState.IDLE
    assert not c.show_arrows and c.dots() == []
    c.tick(60000)
    assert c.current == 0


def test_autoplay_disabled():
    c = _mounted(autoplay=False)
    c.tick(60000)
    assert c.current == 0


def test_pointer_down_stops_and_pointer_up_resumes_after_delay():
    c = _mounted()
    c.tick(3000)
    c.pointer_down()
    assert c.state == CarouselState.PAUSED_BY_POINTER
    c.tick(20000)
    assert c.current == 0

    c.pointer_up()
    c.tick(POINTER_RESUME_DELAY_MS - 1)
    assert c.state == CarouselState.PAUSED_BY_POINTER
    c.tick(1)
    assert c.state == CarouselState.AUTOPLAYING
    # Fresh interval after resuming
    c.tick(4999)
    assert c.current == 0
    c.tick(1)
    assert c.current == 1


def test_pointer_down_during_resume_delay_cancels_it():
    c = _mounted()
    c.pointer_down()
    c.pointer_up()
    c.tick(100)
    c.pointer_down()
    c.tick(10000)
    assert c.state == CarouselState.PAUSED_BY_POINTER
    assert c.current == 0


def test_hover_pauses_only_when_enabled():
    c = _mounted()
    c.mouse_enter()
    assert c.state == CarouselState.PAUSED_BY_HOVER
    c.tick(20000)
    assert c.current == 0
    c.mouse_leave()
    assert c.state == CarouselState.AUTOPLAYING
    c.tick(5000)
    assert c.current == 1

    c = _mounted(pause_on_hover=False)
    c.mouse_enter()
    c.tick(5000)
    assert c.current == 1


def test_unmount_clears_timers():
    c = _mounted()
    c.pointer_down()
    c.pointer_up()
    c.unmount()
    c.tick(60000)
    assert c.current == 0
    assert c.state == CarouselState.IDLE


def test_select_and_arrows_wrap():
    c = _mounted(slides=3)
    assert c.previous() == 2
    assert c.next() == 0
    assert c.select(4) == 1
    assert [d["active"] for d in c.dots()] == [False, True, False]


def test_video_end_advances_only_when_asked():
    slides = [
        SimpleNamespace(media_type="video", media_url="/a.mp4", advance_after_video=True),
        SimpleNamespace(media_type="video", media_url="/b.mp4", advance_after_video=False),
        SimpleNamespace(media_type="image", media_url="/c.jpg", advance_after_video=False),
    ]
    c = _mounted(slides)
    assert not c.should_loop_video(0)
    assert c.should_loop_video(1)

    assert c.video_ended(0) == 1
    assert c.video_ended(1) == 1      # loops instead
    assert c.video_ended(0) == 1      # stale event from a hidden slide


def test_media_failure_swaps_in_placeholder():
    slides = [SimpleNamespace(media_type="video", media_url="/broken.mp4", advance_after_video=False)] * 2
    c = CarouselController(slides, SETTINGS)
    assert c.media_for(0) == ("video", "/broken.mp4")
    assert c.media_failed(0) == PLACEHOLDER_IMAGE
    assert c.media_for(0) == ("image", PLACEHOLDER_IMAGE)
    assert c.media_for(1) == ("video", "/broken.mp4")


def test_first_present_skips_blank_strings():
    assert first_present(None, "  ", "left", default="center") == "left"
    assert first_present(None, "", default="center") == "center"
    assert first_present(0, default=0.3) == 0


def test_layout_precedence_banner_then_settings_then_center():
    banner = SimpleNamespace(
        vertical_alignment=None, text_position="left", heading_align="",
        subheading_align=None, button_align="right", overlay_opacity=None,
    )
    settings = SimpleNamespace(
        content_vertical_align="bottom", content_horizontal_align="right",
        heading_align="right", subheading_align=None, button_align="left",
    )
    layout = resolve_slide_layout(banner, settings)

    assert layout["vertical"] == "bottom"
    assert layout["horizontal"] == "left"
    assert layout["heading_align"] == "right"
    assert layout["subheading_align"] == "center"
    assert layout["button_align"] == "right"
    assert layout["classes"] == {
        "content": "justify-end items-start",
        "heading": "text-right",
        "subheading": "text-center",
        "buttons": "justify-end",
    }
    assert layout["style"]["overlay_opacity"] == DEFAULT_OVERLAY_OPACITY
    assert layout["style"]["title_color"] == "#ffffff"


def test_explicit_zero_overlay_is_kept():
    banner = SimpleNamespace(overlay_opacity=0.0, title_color="#000000")
    layout = resolve_slide_layout(banner, None)
    assert layout["style"]["overlay_opacity"] == 0.0
    assert layout["style"]["title_color"] == "#000000"
    assert layout["vertical"] == "center"
