"""
Hero carousel behaviour, independent of any rendering layer.

Time is fed in through tick(elapsed_ms); the autoplay interval and the
pointer-up debounce are plain counters, so stopping a timer is just
clearing its counter.
"""
import logging

from .pricing import PLACEHOLDER_IMAGE

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 5000
POINTER_RESUME_DELAY_MS = 300
DEFAULT_OVERLAY_OPACITY = 0.3
DEFAULT_ALIGN = "center"
DEFAULT_JUSTIFY = "justify-center"

# Per-slide text style used when neither the banner nor the settings say otherwise
DEFAULT_TEXT_STYLE = {
    "title_color": "#ffffff",
    "title_font_size": "text-4xl md:text-6xl lg:text-7xl",
    "title_font_weight": "font-bold",
    "subtitle_color": "#e5e7eb",
    "subtitle_font_size": "text-lg md:text-xl",
    "subtitle_font_weight": "font-medium",
    "text_animation": "fade-in slide-in-from-bottom-5",
    "content_width": "max-w-2xl",
}

_JUSTIFY = {
    "top": "justify-start",
    "left": "justify-start",
    "start": "justify-start",
    "center": "justify-center",
    "middle": "justify-center",
    "bottom": "justify-end",
    "right": "justify-end",
    "end": "justify-end",
}

_ITEMS = {
    "left": "items-start",
    "start": "items-start",
    "center": "items-center",
    "right": "items-end",
    "end": "items-end",
}

_TEXT = {
    "left": "text-left",
    "start": "text-left",
    "center": "text-center",
    "right": "text-right",
    "end": "text-right",
}


def first_present(*values, default=None):
    """First value that is neither None nor an empty string."""
    for value in values:
        if value is None:
            continue
        if isinstance(value, str) and value.strip() == "":
            continue
        return value
    return default


def _opt(source, name, default=None):
    if source is None:
        return default
    if isinstance(source, dict):
        return source.get(name, default)
    return getattr(source, name, default)


class CarouselState:
    IDLE = "idle"
    AUTOPLAYING = "autoplaying"
    PAUSED_BY_POINTER = "paused_by_pointer"
    PAUSED_BY_HOVER = "paused_by_hover"


class CarouselController:
    """
    slides: the ordered banner rows, or just a slide count.
    settings: the hero settings row (or a dict with the same keys).
    """

    def __init__(self, slides, settings=None):
        if isinstance(slides, int):
            self.slides = [None] * max(0, slides)
        else:
            self.slides = list(slides or [])
        self.settings = settings
        self.current = 0
        self.state = CarouselState.IDLE
        self.hovered = False
        self.mounted = False
        self._timer = None       # ms elapsed in the current autoplay interval
        self._resume_in = None   # ms left before a pointer-up restart
        self._media_overrides = {}

    # --- configuration ---

    @property
    def slide_count(self):
        return len(self.slides)

    @property
    def autoplay_enabled(self):
        return bool(_opt(self.settings, "autoplay", False)) and self.slide_count > 1

    @property
    def interval(self):
        return int(_opt(self.settings, "autoplay_interval") or DEFAULT_INTERVAL_MS)

    @property
    def pause_on_hover(self):
        return bool(_opt(self.settings, "pause_on_hover", False))

    @property
    def show_arrows(self):
        return bool(_opt(self.settings, "show_arrows", True)) and self.slide_count > 1

    @property
    def show_dots(self):
        return bool(_opt(self.settings, "show_dots", True)) and self.slide_count > 1

    # --- timers ---

    def _start(self):
        self._stop()
        if not self.mounted or not self.autoplay_enabled:
            self.state = CarouselState.IDLE
            return
        if self.hovered and self.pause_on_hover:
            self.state = CarouselState.PAUSED_BY_HOVER
            return
        self._timer = 0
        self.state = CarouselState.AUTOPLAYING

    def _stop(self):
        self._timer = None

    def _advance(self):
        if self.slide_count:
            self.current = (self.current + 1) % self.slide_count

    # --- lifecycle ---

    def mount(self):
        self.mounted = True
        self._start()
        return self.state

    def stop(self):
        self._stop()
        self._resume_in = None

    def unmount(self):
        self.stop()
        self.mounted = False
        self.state = CarouselState.IDLE

    def tick(self, elapsed_ms):
        remaining = max(0, int(elapsed_ms))

        if self._resume_in is not None:
            if remaining < self._resume_in:
                self._resume_in -= remaining
                return self.current
            remaining -= self._resume_in
            self._resume_in = None
            self._start()

        if self._timer is not None:
            self._timer += remaining
            while self._timer >= self.interval:
                self._timer -= self.interval
                self._advance()
        return self.current

    # --- interaction ---

    def pointer_down(self):
        self._stop()
        self._resume_in = None
        if self.mounted and self.autoplay_enabled:
            self.state = CarouselState.PAUSED_BY_POINTER

    def pointer_up(self):
        if self.state == CarouselState.PAUSED_BY_POINTER:
            self._resume_in = POINTER_RESUME_DELAY_MS

    def mouse_enter(self):
        self.hovered = True
        if self.pause_on_hover and self.state == CarouselState.AUTOPLAYING:
            self._stop()
            self.state = CarouselState.PAUSED_BY_HOVER

    def mouse_leave(self):
        self.hovered = False
        if self.state == CarouselState.PAUSED_BY_HOVER:
            self._start()

    def select(self, index):
        # The running interval is not restarted
        if self.slide_count:
            self.current = int(index) % self.slide_count
        return self.current

    def next(self):
        self._advance()
        return self.current

    def previous(self):
        if self.slide_count:
            self.current = (self.current - 1) % self.slide_count
        return self.current

    def dots(self):
        if not self.show_dots:
            return []
        return [{"index": i, "active": i == self.current} for i in range(self.slide_count)]

    # --- media ---

    def _slide(self, index):
        if 0 <= index < self.slide_count:
            return self.slides[index]
        return None

    def should_loop_video(self, index):
        return not bool(_opt(self._slide(index), "advance_after_video", False))

    def video_ended(self, index):
        """Advance past a finished video when the slide asks for it."""
        if index != self.current:
            return self.current
        if _opt(self._slide(index), "advance_after_video", False):
            self._advance()
        return self.current

    def media_failed(self, index):
        logger.warning("Hero media failed to load for slide %s", index)
        self._media_overrides[index] = PLACEHOLDER_IMAGE
        return PLACEHOLDER_IMAGE

    def media_for(self, index):
        """Returns (media_type, url) as it should be rendered right now."""
        if index in self._media_overrides:
            return "image", self._media_overrides[index]
        slide = self._slide(index)
        return (
            _opt(slide, "media_type") or "image",
            first_present(_opt(slide, "media_url"), default=PLACEHOLDER_IMAGE),
        )

    def snapshot(self):
        return {
            "current": self.current,
            "state": self.state,
            "autoplay": self.autoplay_enabled,
            "interval": self.interval,
            "show_arrows": self.show_arrows,
            "show_dots": self.show_dots,
        }


def resolve_slide_layout(banner, settings=None):
    """
    Each axis resolves banner override -> global hero setting -> "center".
    """
    vertical = first_present(
        _opt(banner, "vertical_alignment"), _opt(settings, "content_vertical_align"), default=DEFAULT_ALIGN
    )
    horizontal = first_present(
        _opt(banner, "text_position"), _opt(settings, "content_horizontal_align"), default=DEFAULT_ALIGN
    )
    heading = first_present(_opt(banner, "heading_align"), _opt(settings, "heading_align"), default=DEFAULT_ALIGN)
    subheading = first_present(
        _opt(banner, "subheading_align"), _opt(settings, "subheading_align"), default=DEFAULT_ALIGN
    )
    buttons = first_present(_opt(banner, "button_align"), _opt(settings, "button_align"), default=DEFAULT_ALIGN)

    style = {
        name: first_present(_opt(banner, name), default=fallback)
        for name, fallback in DEFAULT_TEXT_STYLE.items()
    }
    style["overlay_opacity"] = first_present(_opt(banner, "overlay_opacity"), default=DEFAULT_OVERLAY_OPACITY)

    return {
        "vertical": vertical,
        "horizontal": horizontal,
        "heading_align": heading,
        "subheading_align": subheading,
        "button_align": buttons,
        "classes": {
            "content": " ".join([
                _JUSTIFY.get(vertical, DEFAULT_JUSTIFY),
                _ITEMS.get(horizontal, "items-center"),
            ]),
            "heading": _TEXT.get(heading, "text-center"),
            "subheading": _TEXT.get(subheading, "text-center"),
            "buttons": _JUSTIFY.get(buttons, DEFAULT_JUSTIFY),
        },
        "style": style,
    }
