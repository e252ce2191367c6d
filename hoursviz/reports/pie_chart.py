"""PieChartRenderer class for drawing the employee time distribution as a PNG."""
from pathlib import Path
from typing import List, NamedTuple, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from .aggregator import EmployeeSummary, total_hours
from ..errors import RenderError

RGB = Tuple[int, int, int]

# Colors repeat once there are more employees than entries.
PALETTE: Tuple[RGB, ...] = (
    (255, 99, 132),   # red
    (54, 162, 235),   # blue
    (255, 205, 86),   # yellow
    (75, 192, 192),   # teal
    (153, 102, 255),  # purple
    (255, 159, 64),   # orange
    (199, 199, 199),  # gray
    (83, 102, 255),   # light blue
    (255, 99, 255),   # pink
    (99, 255, 132),   # light green
    (255, 159, 255),  # light pink
    (159, 255, 99),   # lime
)

BACKGROUND: RGB = (255, 255, 255)
TITLE_COLOR: RGB = (51, 51, 51)
TEXT_COLOR: RGB = (0, 0, 0)
MUTED_COLOR: RGB = (128, 128, 128)
BORDER_COLOR: RGB = (255, 255, 255)
BORDER_WIDTH = 2

# Layout (pixels)
TITLE_TOP = 10
PIE_LEFT = 50
PIE_TOP = 80
LEGEND_GAP = 30
LEGEND_TOP = 120
LEGEND_HEADER_OFFSET = 25
LEGEND_ROW_HEIGHT = 28
SWATCH_SIZE = 16

DEFAULT_TITLE = "Employee Time Distribution"
LEGEND_TITLE = "Employee Time Breakdown"
NO_DATA_MESSAGE = "No data available"


class ChartSlice(NamedTuple):
    """Geometry and legend data for one pie slice."""

    employee_name: str
    total_hours: float
    percentage: float
    start_angle: float
    sweep_angle: float
    color: RGB

    @property
    def end_angle(self) -> float:
        return self.start_angle + self.sweep_angle


def color_for(index: int) -> RGB:
    """Palette color for the slice at ``index``, cycling through PALETTE."""
    return PALETTE[index % len(PALETTE)]


def build_slices(summaries: List[EmployeeSummary]) -> List[ChartSlice]:
    """Compute pie slices in input order.

    The first slice starts at 0 degrees and each following slice starts where
    the previous one ended, so the sweeps add up to 360 degrees.

    Args:
        summaries: Employee summaries, already sorted

    Returns:
        One ChartSlice per summary, or an empty list if the total is zero
    """
    total = total_hours(summaries)
    if total == 0:
        return []

    slices = []
    angle = 0.0
    for i, summary in enumerate(summaries):
        share = summary.total_hours / total
        sweep = 360.0 * share
        slices.append(ChartSlice(summary.employee_name, summary.total_hours, share * 100, angle, sweep, color_for(i)))
        angle += sweep
    return slices


def load_font(size: int, bold: bool = False) -> ImageFont.ImageFont:
    """Load DejaVu Sans at the given size, or Pillow's built-in font if it is not installed."""
    name = "DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf"
    try:
        return ImageFont.truetype(name, size)
    except OSError:
        return ImageFont.load_default()


def pie_box(width: int, height: int) -> Tuple[int, int, int, int]:
    """Bounding box (left, top, right, bottom) of the pie for a canvas size."""
    size = max(min(width - 400, height - 200), 1)
    return PIE_LEFT, PIE_TOP, PIE_LEFT + size, PIE_TOP + size


class PieChartRenderer:
    """Class for rendering employee summaries as a pie chart with a side legend."""

    def __init__(self, title: str = DEFAULT_TITLE):
        """Initialize a PieChartRenderer.

        Args:
            title: Title centered above the chart
        """
        self.title = title

    def render(self, summaries: List[EmployeeSummary], width: int = 1000, height: int = 700) -> Image.Image:
        """Render the pie chart.

        If the summaries add up to zero hours (including no summaries at all),
        the image only contains a "No data available" message.

        Args:
            summaries: Employee summaries, already sorted
            width: Image width in pixels
            height: Image height in pixels

        Returns:
            RGB image; the caller owns it and should close it

        Raises:
            ValueError: If width or height is not positive
        """
        if width < 1 or height < 1:
            raise ValueError(f"Chart size must be positive, got {width}x{height}")

        image = Image.new("RGB", (width, height), BACKGROUND)
        draw = ImageDraw.Draw(image)

        slices = build_slices(summaries)
        if not slices:
            self._draw_no_data(draw, width, height)
            return image

        self._draw_title(draw, width)

        box = pie_box(width, height)
        for chart_slice in slices:
            # zero-hour employees still get a legend row
            if chart_slice.sweep_angle <= 0:
                continue
            draw.pieslice(
                box, chart_slice.start_angle, chart_slice.end_angle,
                fill=chart_slice.color, outline=BORDER_COLOR, width=BORDER_WIDTH,
            )

        self._draw_legend(draw, slices, box[2] + LEGEND_GAP, LEGEND_TOP)
        return image

    def _draw_title(self, draw: ImageDraw.ImageDraw, width: int):
        font = load_font(20, bold=True)
        left, _, right, _ = draw.textbbox((0, 0), self.title, font=font)
        draw.text(((width - (right - left)) / 2, TITLE_TOP), self.title, fill=TITLE_COLOR, font=font)

    def _draw_legend(self, draw: ImageDraw.ImageDraw, slices: List[ChartSlice], x: int, y: int):
        """Draw the legend: one swatch, name and hours line per slice, stacked vertically.

        Args:
            draw: Drawing context
            slices: Slices in legend order
            x: Left edge of the legend
            y: Top of the first legend row
        """
        header_font = load_font(12, bold=True)
        font = load_font(11)

        draw.text((x, y - LEGEND_HEADER_OFFSET), LEGEND_TITLE, fill=TEXT_COLOR, font=header_font)

        text_x = x + SWATCH_SIZE + 8
        for i, chart_slice in enumerate(slices):
            row_y = y + i * LEGEND_ROW_HEIGHT
            draw.rectangle(
                [x, row_y + 3, x + SWATCH_SIZE, row_y + 3 + SWATCH_SIZE],
                fill=chart_slice.color, outline=TEXT_COLOR,
            )
            draw.text((text_x, row_y), chart_slice.employee_name, fill=TEXT_COLOR, font=font)
            detail = f"{chart_slice.total_hours:.1f}h ({chart_slice.percentage:.1f}%)"
            draw.text((text_x, row_y + 14), detail, fill=MUTED_COLOR, font=font)

    def _draw_no_data(self, draw: ImageDraw.ImageDraw, width: int, height: int):
        font = load_font(16)
        left, top, right, bottom = draw.textbbox((0, 0), NO_DATA_MESSAGE, font=font)
        x = (width - (right - left)) / 2
        y = (height - (bottom - top)) / 2
        draw.text((x, y), NO_DATA_MESSAGE, fill=MUTED_COLOR, font=font)

    def save(self, image: Image.Image, path: Union[str, Path]) -> Path:
        """Save a rendered chart as PNG.

        Args:
            image: Rendered chart
            path: Output file path

        Returns:
            Absolute path of the written file

        Raises:
            RenderError: If the file cannot be written
        """
        path = Path(path)
        try:
            image.save(path, format="PNG")
        except (OSError, ValueError) as e:
            raise RenderError(f"Failed to save chart to '{path}': {e}") from e
        return path.resolve()

