"""
Tests for smart crop analyzers
"""

from PIL import Image, ImageDraw

from imageproxy.core.enums import SmartCropMethod
from imageproxy.core.image import PillowEngine
from imageproxy.core.image.pillow_engine import PillowImage
from imageproxy.core.image.smartcrop import CentreAnalyzer, EdgeEnergyAnalyzer, get_analyzer


def detail_on_right(width=300, height=100):
    """Flat image with a checkerboard patch near the right edge"""
    image = Image.new("RGB", (width, height), (40, 40, 40))
    draw = ImageDraw.Draw(image)
    for x in range(width - 90, width - 10, 10):
        for y in range(10, height - 10, 10):
            if (x // 10 + y // 10) % 2 == 0:
                draw.rectangle((x, y, x + 9, y + 9), fill=(255, 255, 255))
    return image


class TestAnalyzers:
    """Test crop origin selection"""

    def test_centre(self):
        image = Image.new("RGB", (300, 100))
        assert CentreAnalyzer().find_origin(image, 100, 100) == (100, 0)

    def test_edge_energy_finds_detail(self):
        left, top = EdgeEnergyAnalyzer().find_origin(detail_on_right(), 100, 100)
        assert top == 0
        assert left >= 180

    def test_edge_energy_flat_image_falls_back_to_centre(self):
        image = Image.new("RGB", (300, 100), (10, 10, 10))
        assert EdgeEnergyAnalyzer().find_origin(image, 100, 100) == (100, 0)

    def test_edge_energy_full_window(self):
        assert EdgeEnergyAnalyzer().find_origin(detail_on_right(), 300, 100) == (0, 0)

    def test_get_analyzer(self):
        assert isinstance(get_analyzer(SmartCropMethod.CENTRE), CentreAnalyzer)
        assert isinstance(get_analyzer(SmartCropMethod.EDGE_ENERGY), EdgeEnergyAnalyzer)


class TestSmartCropIntegration:
    """Analyzer wired into the Pillow image"""

    def test_edge_energy_crop_keeps_detail(self, pixels):
        image = PillowImage(detail_on_right(), "png", analyzer=EdgeEnergyAnalyzer())
        image.smart_crop(100, 100)

        assert image.size == (100, 100)
        colors = pixels(image).getcolors(maxcolors=1 << 16)
        assert any(color == (255, 255, 255) for _, color in colors)

    def test_engine_passes_analyzer(self, image_bytes):
        analyzer = EdgeEnergyAnalyzer()
        image = PillowEngine(analyzer=analyzer).decode(image_bytes(64, 32))
        assert image.analyzer is analyzer
