# table_agent/renderer.py
from io import BytesIO
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from table_agent.models import TableSnapshot

# Falls back to PIL's bitmap font when DejaVu is not installed.
try:
    DEFAULT_FONT = ImageFont.truetype("DejaVuSans.ttf", 14)
    HEADER_FONT = ImageFont.truetype("DejaVuSans-Bold.ttf", 16)
except IOError:
    DEFAULT_FONT = ImageFont.load_default()
    HEADER_FONT = DEFAULT_FONT

CELL_PADDING = 8
LINE_WIDTH = 1
ROW_HEIGHT_MIN = 28
HEADER_FILL = (245, 245, 245)


def _line_height(font) -> int:
    bbox = font.getbbox("Ag")
    return bbox[3] - bbox[1]


def measure_text(text: str, font, max_width: int) -> Tuple[List[str], int]:
    """Wrap text into lines that fit max_width and return wrapped lines and height."""
    words = text.split()
    if not words:
        return [""], _line_height(font) + 2 * CELL_PADDING

    lines = []
    line = ""
    for w in words:
        test = (line + " " + w).strip()
        bbox = font.getbbox(test)
        if bbox[2] - bbox[0] + 2 * CELL_PADDING > max_width and line:
            lines.append(line)
            line = w
        else:
            line = test
    if line:
        lines.append(line)

    return lines, len(lines) * _line_height(font) + 2 * CELL_PADDING


def _draw_lines(draw, lines: List[str], left: int, top: int, font) -> None:
    step = _line_height(font)
    for ln in lines:
        draw.text((left, top), ln, font=font, fill="black")
        top += step


def render_table_image(snapshot: TableSnapshot, title: Optional[str] = None, max_width: int = 1200) -> Image.Image:
    """
    Render the snapshot as a grid: a shaded header line, then one line per row.
    Row labels are not drawn; the columns are the snapshot's headers.
    """
    n_cols = max(1, snapshot.column_count)
    col_width = max_width // n_cols

    header_height = max([measure_text(h, HEADER_FONT, col_width)[1] for h in snapshot.headers] or [ROW_HEIGHT_MIN]) + 2
    row_heights = [
        max([ROW_HEIGHT_MIN] + [measure_text(str(cell.value), DEFAULT_FONT, col_width)[1] for cell in row])
        for row in snapshot.rows
    ]

    title_height = 0
    if title:
        _, th = measure_text(title, HEADER_FONT, max_width)
        title_height = th + 12

    total_height = title_height + header_height + sum(row_heights) + (len(row_heights) + 2) * LINE_WIDTH + 20

    img = Image.new("RGB", (max_width, total_height), "white")
    draw = ImageDraw.Draw(img)

    y = 10
    if title:
        draw.text((10, y), title, font=HEADER_FONT, fill="black")
        y += title_height

    draw.rectangle([0, y, max_width, y + header_height], fill=HEADER_FILL)
    x = 0
    for header in snapshot.headers:
        lines, _ = measure_text(header, HEADER_FONT, col_width)
        _draw_lines(draw, lines, x + CELL_PADDING, y + CELL_PADDING, HEADER_FONT)
        draw.line([x + col_width, y, x + col_width, total_height], fill="black", width=LINE_WIDTH)
        x += col_width
    y += header_height
    draw.line([0, y, max_width, y], fill="black", width=LINE_WIDTH)

    for row, row_h in zip(snapshot.rows, row_heights):
        x = 0
        for cell in row:
            lines, _ = measure_text(str(cell.value), DEFAULT_FONT, col_width)
            _draw_lines(draw, lines, x + CELL_PADDING, y + CELL_PADDING, DEFAULT_FONT)
            x += col_width
        draw.line([0, y + row_h, max_width, y + row_h], fill="black", width=LINE_WIDTH)
        y += row_h

    return img


def render_table_png(snapshot: TableSnapshot, title: Optional[str] = None) -> bytes:
    buf = BytesIO()
    render_table_image(snapshot, title=title).save(buf, format="PNG")
    return buf.getvalue()
