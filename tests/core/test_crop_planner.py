"""
Tests for CropPlanner
"""

import pytest

from imageproxy.core.geometry.crop import CropPlanner
from imageproxy.core.geometry.numeric import evaluate
from imageproxy.schemas import Options


class TestCropPlanner:
    """Test explicit and smart crop planning"""

    def test_no_crop_requested(self):
        """All crop fields zero and no smart crop skips planning"""
        options = Options(width=100)
        assert not CropPlanner.is_requested(options)
        assert CropPlanner.plan(options, 400, 300) is None

    def test_smart_crop_is_requested(self):
        assert CropPlanner.is_requested(Options(smart_crop=True))

    def test_absolute_crop(self):
        box = CropPlanner.plan(Options(crop_x=10, crop_y=20, crop_width=100, crop_height=50), 400, 300)
        assert box.to_dict() == {"x": 10, "y": 20, "width": 100, "height": 50}

    def test_percentage_crop(self):
        box = CropPlanner.plan(
            Options(crop_x=0.25, crop_y=0.5, crop_width=0.5, crop_height=0.25), 400, 200
        )
        assert box.to_dict() == {"x": 100, "y": 100, "width": 200, "height": 50}

    def test_zero_extent_runs_to_edge(self):
        """Zero width/height crops to the right/bottom edge"""
        box = CropPlanner.plan(Options(crop_x=100, crop_y=50), 400, 300)
        assert box.to_dict() == {"x": 100, "y": 50, "width": 300, "height": 250}

    @pytest.mark.parametrize("crop_x", [-10, -0.1])
    def test_negative_x_measures_from_right(self, crop_x):
        """Negative origin is measured from the opposite edge"""
        box = CropPlanner.plan(Options(crop_x=crop_x), 400, 300)
        assert box.x == 400 - evaluate(abs(crop_x), 400)
        assert box.x2 == 400

    def test_negative_y_measures_from_bottom(self):
        box = CropPlanner.plan(Options(crop_y=-30, crop_height=10), 400, 300)
        assert box.y == 270
        assert box.height == 10

    def test_relative_offsets_clamped_to_bounds(self):
        """400x400 with (-0.25, -0.25, 0.5, 0.5) keeps the bottom-right 100x100"""
        options = Options(crop_x=-0.25, crop_y=-0.25, crop_width=0.5, crop_height=0.5)
        box = CropPlanner.plan(options, 400, 400)

        assert (box.x, box.y) == (300, 300)
        assert (box.x2, box.y2) == (400, 400)
        assert box.fits_within(400, 400)

    def test_extent_clamped_to_bounds(self):
        box = CropPlanner.plan(Options(crop_x=350, crop_width=200), 400, 300)
        assert box.x2 == 400
        assert box.width == 50

    def test_origin_past_edge_gives_empty_box(self):
        """Origins beyond the image never extend the box past the bounds"""
        box = CropPlanner.plan(Options(crop_x=500), 400, 300)
        assert box.is_empty
        assert box.fits_within(400, 300)

    def test_origin_before_left_edge_clamped(self):
        """A negative offset larger than the image starts at 0"""
        box = CropPlanner.plan(Options(crop_x=-1000, crop_width=100), 400, 300)
        assert box.x == 0
        assert box.width == 100

    def test_full_image_is_noop(self):
        """A box covering the whole image is not issued"""
        assert CropPlanner.plan(Options(crop_width=400, crop_height=300), 400, 300) is None
        assert CropPlanner.plan(Options(crop_width=1000), 400, 300) is None

    @pytest.mark.parametrize(
        "options",
        [
            Options(crop_x=-1000, crop_width=100),
            Options(crop_x=0.9, crop_y=0.9, crop_width=0.9, crop_height=0.9),
            Options(crop_x=399, crop_y=299, crop_width=5000, crop_height=5000),
            Options(crop_x=-0.5, crop_width=10000),
        ],
    )
    def test_box_never_exceeds_bounds(self, options):
        box = CropPlanner.plan(options, 400, 300)
        assert box is not None
        assert box.x >= 0 and box.y >= 0
        assert box.fits_within(400, 300)


class TestSmartCropPlanning:
    """Test smart crop target sizes"""

    def test_target_from_width_and_height(self):
        target = CropPlanner.plan_smart(Options(smart_crop=True, width=100, height=50), 400, 300)
        assert target.as_tuple() == (100, 50)

    def test_percentage_target(self):
        target = CropPlanner.plan_smart(
            Options(smart_crop=True, width=0.5, height=0.5), 400, 300
        )
        assert target.as_tuple() == (200, 150)

    def test_missing_axis_keeps_current_size(self):
        target = CropPlanner.plan_smart(Options(smart_crop=True, width=100), 400, 300)
        assert target.as_tuple() == (100, 300)

    def test_no_target_is_noop(self):
        assert CropPlanner.plan_smart(Options(smart_crop=True), 400, 300) is None
