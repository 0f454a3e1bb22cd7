"""
PDF renderer for Aztec diamond tilings using fpdf2.
"""
from typing import Dict, Tuple
from fpdf import FPDF

from aztec_diamond import AztecDiamond, Color


class DiamondRenderer:
    """Renders a tiling to a single letter-size PDF page."""

    PAGE_WIDTH = 216   # Letter, portrait (mm)
    PAGE_HEIGHT = 279
    MARGIN = 20
    TITLE_HEIGHT = 20

    # Smallest cell size (mm) that still gets black outlines
    MIN_CELL_SIZE_FOR_BORDER = 1.5

    COLORS: Dict[Color, Tuple[int, int, int]] = {
        Color.ORANGE: (255, 165, 0),
        Color.RED: (220, 30, 30),
        Color.GREEN: (40, 160, 60),
        Color.BLUE: (40, 80, 220),
    }

    def __init__(self, diamond: AztecDiamond):
        self.diamond = diamond
        self.pdf = FPDF(orientation='P', unit='mm', format='letter')
        self.pdf.set_auto_page_break(auto=False)

    def cell_size(self) -> float:
        """Largest cell size (mm) that fits the diamond's box on the page."""
        available_w = self.PAGE_WIDTH - 2 * self.MARGIN
        available_h = self.PAGE_HEIGHT - 2 * self.MARGIN - self.TITLE_HEIGHT
        return min(available_w, available_h) / self.diamond.extent

    def domino_rect(self, color: Color, x: int, y: int, x_start: float, y_start: float,
                    cell_size: float) -> Tuple[float, float, float, float]:
        """
        Page rectangle (left, top, width, height) of a domino. Grid y grows
        upwards while page y grows downwards, so rows are flipped.
        """
        if color.is_upright:
            w, h = cell_size, cell_size * 2
        else:
            w, h = cell_size * 2, cell_size
        left = x_start + x * cell_size
        top = y_start + (self.diamond.extent - y) * cell_size - h
        return left, top, w, h

    def draw_diamond(self, x_start: float, y_start: float, cell_size: float):
        """Draw every domino of the tiling."""
        with_border = cell_size >= self.MIN_CELL_SIZE_FOR_BORDER
        style = 'DF' if with_border else 'F'

        self.pdf.set_draw_color(0, 0, 0)
        self.pdf.set_line_width(min(0.3, cell_size * 0.1))
        for color, x, y in self.diamond.dominoes():
            self.pdf.set_fill_color(*self.COLORS[color])
            left, top, w, h = self.domino_rect(color, x, y, x_start, y_start, cell_size)
            self.pdf.rect(left, top, w, h, style=style)

    def draw_title(self):
        self.pdf.set_font('Helvetica', 'B', 16)
        self.pdf.set_text_color(40, 40, 40)
        self.pdf.set_xy(0, self.MARGIN)
        title = f"Aztec diamond A({self.diamond.order})"
        self.pdf.cell(self.PAGE_WIDTH, 10, title, align='C')

    def render(self, output_path: str):
        """Render the tiling to PDF."""
        self.pdf.add_page()
        self.draw_title()

        cell_size = self.cell_size()
        box = cell_size * self.diamond.extent
        x_start = (self.PAGE_WIDTH - box) / 2
        y_start = self.MARGIN + self.TITLE_HEIGHT
        self.draw_diamond(x_start, y_start, cell_size)

        self.pdf.output(output_path)
        print(f"Saved tiling to: {output_path}")


if __name__ == "__main__":
    diamond = AztecDiamond(max_extent=200, seed=7)
    diamond.grow_to(40)
    DiamondRenderer(diamond).render("aztec_test.pdf")
