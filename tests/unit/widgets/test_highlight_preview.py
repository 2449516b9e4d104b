"""Tests for the highlight preview widget."""

from rich.color import Color
from textual.app import App, ComposeResult

from tintswitch.appearance.host import MemoryHost
from tintswitch.color.palette import RGBColor
from tintswitch.models import AppearanceMode, HighlightAttributes
from tintswitch.widgets.highlight_preview import HighlightPreview, highlight_style


class TestHighlightStyle:
    """Tests for highlight_style."""

    def test_gui_uses_true_color(self) -> None:
        info = HighlightAttributes(
            name="Comment",
            fg=RGBColor.from_hex("#5c6370"),
            styles=frozenset({"italic"}),
            ctermfg="242",
        )
        style = highlight_style(info, AppearanceMode.GUI)
        assert style.color == Color.parse("#5c6370")
        assert style.bgcolor is None
        assert style.italic
        assert not style.bold

    def test_basic_uses_palette_index(self) -> None:
        info = HighlightAttributes(name="Todo", fg=RGBColor.from_hex("#d19a66"), ctermfg="228", ctermbg="234", cterm="bold")
        style = highlight_style(info, AppearanceMode.BASIC)
        assert style.color == Color.parse("color(228)")
        assert style.bgcolor == Color.parse("color(234)")
        assert style.bold

    def test_basic_without_colors(self) -> None:
        style = highlight_style(HighlightAttributes(name="Visual"), AppearanceMode.BASIC)
        assert style.color is None
        assert style.bgcolor is None
        assert not style.bold


class PreviewApp(App[None]):
    def compose(self) -> ComposeResult:
        yield HighlightPreview(id="preview")


class TestHighlightPreviewInApp:
    """Functional tests for HighlightPreview."""

    async def test_shows_defined_groups(self) -> None:
        host = MemoryHost()
        host.apply_colorscheme("lw-rubber")
        app = PreviewApp()
        async with app.run_test(size=(80, 24)):
            preview = app.query_one("#preview", HighlightPreview)
            assert preview.show(host, ["Normal", "Missing", "Comment"], AppearanceMode.GUI) == 2

    async def test_empty_host(self) -> None:
        app = PreviewApp()
        async with app.run_test(size=(80, 24)):
            preview = app.query_one("#preview", HighlightPreview)
            assert preview.show(MemoryHost(), ["Normal"], AppearanceMode.BASIC) == 0
