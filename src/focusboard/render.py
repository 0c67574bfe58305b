from __future__ import annotations
from typing import List
from PIL import Image, ImageDraw, ImageFont

from .board import Bucket, View, fmt_day
from .models import Event

LOADING_TEXT = "Loading Focus..."
FONT_PATH = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"


def _event_line(e: Event, show_date: bool) -> str:
    parts = [f"[{e.category.upper()}]", e.title]
    if e.time_range:
        parts.append(f"· {e.time_range}")
    if show_date:
        parts.append(f"· {fmt_day(e.event_date)}")
    if e.deletable:
        parts.append(f"(id {e.id})")
    return " ".join(parts)


def _visible_buckets(view: View) -> List[Bucket]:
    # Empty sections are hidden unless they carry an empty-state message.
    return [b for b in view.buckets if b.events or b.empty_text]


def render_text(view: View, details: bool = False) -> str:
    if view.loading:
        return LOADING_TEXT

    lines: List[str] = list(view.header)
    if view.tabs:
        lines.append("  ".join(f"[{t}]" if t == view.selected_tab else t for t in view.tabs))
    lines.append("")

    for bucket in _visible_buckets(view):
        lines.append(bucket.label)
        if not bucket.events:
            lines.append(f"  {bucket.empty_text}")
        for e in bucket.events:
            lines.append(f"  {_event_line(e, bucket.show_date)}")
            if details and e.has_details and not e.is_personal:
                lines.append(f"      {e.description}")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def _load_font(size: int) -> ImageFont.FreeTypeFont:
    # DejaVu ships with most Linux distros; Pillow's bundled font covers the rest.
    try:
        return ImageFont.truetype(FONT_PATH, size)
    except OSError:
        return ImageFont.load_default(size)


def _fit_lines(
    draw: ImageDraw.ImageDraw,
    text: str,
    font: ImageFont.FreeTypeFont,
    max_width: float,
    max_lines: int = 2,
) -> List[str]:
    """Greedy word wrap; the last kept line ends in an ellipsis when text is cut."""
    lines: List[str] = []
    for word in text.split():
        if lines and draw.textlength(f"{lines[-1]} {word}", font=font) <= max_width:
            lines[-1] = f"{lines[-1]} {word}"
        else:
            lines.append(word)

    if len(lines) <= max_lines:
        return lines

    kept = lines[:max_lines]
    last = kept[-1]
    while last and draw.textlength(last + "…", font=font) > max_width:
        last = last[:-1].rstrip()
    kept[-1] = last + "…"
    return kept


def render_image(view: View, canvas_w: int = 800, canvas_h: int = 1200) -> Image.Image:
    """Draw the active view as a black-on-white snapshot."""
    img = Image.new("RGB", (canvas_w, canvas_h), "white")
    d = ImageDraw.Draw(img)

    size_header, size_label, size_title, size_small = 64, 26, 36, 24
    font_header = _load_font(size_header)
    font_label = _load_font(size_label)
    font_title = _load_font(size_title)
    font_small = _load_font(size_small)

    padding = 40
    y = padding
    max_y = canvas_h - padding

    if view.loading:
        w = d.textlength(LOADING_TEXT, font=font_label)
        d.text(((canvas_w - w) / 2, canvas_h / 2), LOADING_TEXT, fill="black", font=font_label)
        return img

    for i, line in enumerate(view.header):
        font, size = (font_small, size_small) if i == 0 else (font_header, size_header)
        d.text((padding, y), line, fill="black", font=font)
        y += size + 10

    if view.tabs:
        x = padding
        for tab in view.tabs:
            fill = "black" if tab == view.selected_tab else (170, 170, 170)
            d.text((x, y), tab, fill=fill, font=font_title)
            x += d.textlength(tab, font=font_title) + 24
        y += size_title + 10

    d.line((padding, y, canvas_w - padding, y), fill="black", width=2)
    y += 25

    title_line_h = size_title + 8
    for bucket in _visible_buckets(view):
        if y + size_label > max_y:
            break
        d.text((padding, y), bucket.label, fill=(90, 90, 90), font=font_label)
        y += size_label + 14

        if not bucket.events:
            d.text((padding + 16, y), bucket.empty_text, fill=(120, 120, 120), font=font_small)
            y += size_small + 24
            continue

        for e in bucket.events:
            lines = _fit_lines(d, e.title, font_title, canvas_w - 2 * padding)
            row_h = size_small + 8 + title_line_h * len(lines) + 18
            if y + row_h > max_y:
                break

            d.text((padding, y), e.category.upper(), fill="black", font=font_small)
            meta = " · ".join(
                part
                for part in [e.time_range or "", fmt_day(e.event_date) if bucket.show_date else ""]
                if part
            )
            if meta:
                meta_w = d.textlength(meta, font=font_small)
                d.text((canvas_w - padding - meta_w, y), meta, fill=(90, 90, 90), font=font_small)
            y += size_small + 8

            for line in lines:
                d.text((padding, y), line, fill="black", font=font_title)
                y += title_line_h
            y += 18

        y += 12

    return img
