"""
Unit tests for the named image operations.

Tests cover:
- Operation lookup by name
- Built-in operation executors and their parameter validation
- Running a sequence of steps
"""

import unittest
from unittest.mock import Mock

import pytest

from IP_Libs.ImageCoreLib import Dimensions, OwnedImage, Pixel
from IP_Libs.ProcessingLib.operation_registry import (
    OPERATIONS,
    execute_blur,
    execute_copy,
    execute_crop,
    execute_flip,
    execute_greyscale,
    get_operation,
    run_operations,
)
from tests.image_helpers import make_gradient_image, make_random_image


class TestGetOperation(unittest.TestCase):
    """Test looking up executors by name."""

    def test_built_in_names(self):
        self.assertEqual(sorted(OPERATIONS), ["Blur", "Copy", "Crop", "Flip", "Greyscale"])

    def test_lookup(self):
        self.assertIs(get_operation("Flip"), execute_flip)

    def test_unknown_name_lists_available(self):
        with self.assertRaises(KeyError) as ctx:
            get_operation("Sharpen")
        self.assertIn("Greyscale", str(ctx.exception))

    def test_lookup_in_custom_mapping(self):
        executor = Mock()
        self.assertIs(get_operation("Custom", {"Custom": executor}), executor)

    def test_custom_mapping_does_not_fall_back(self):
        with self.assertRaises(KeyError):
            get_operation("Flip", {})


class TestExecutors:
    """Tests for the built-in executors."""

    def test_crop(self):
        image = make_gradient_image(6, 5)
        result = execute_crop({"x": 4, "y": 1, "width": 10, "height": 2}, image)
        assert isinstance(result, OwnedImage)
        assert result.dimensions == Dimensions(2, 2)
        assert result.get_pixel(0, 0) == image.get_pixel(4, 1)
        assert not image.is_borrowed

    def test_crop_defaults_to_whole_image(self):
        image = make_gradient_image(3, 3)
        assert execute_crop({}, image) == image

    def test_crop_rejects_negative_size(self):
        with pytest.raises(ValueError):
            execute_crop({"width": -1}, make_gradient_image(3, 3))

    def test_crop_rejects_non_integer(self):
        with pytest.raises(ValueError):
            execute_crop({"x": "1"}, make_gradient_image(3, 3))

    def test_flip(self):
        image = make_gradient_image(4, 3)
        result = execute_flip({"horizontal": True, "vertical": True}, image)
        assert result == image.flipped(True, True)

    def test_flip_rejects_non_bool(self):
        with pytest.raises(ValueError):
            execute_flip({"horizontal": "yes"}, make_gradient_image(2, 2))

    def test_greyscale(self):
        image = OwnedImage.filled(Dimensions(2, 2), Pixel(10, 20, 30, 255))
        result = execute_greyscale({}, image)
        assert result.get_pixel(1, 1) == Pixel(18, 18, 18, 255)

    def test_blur(self):
        image = make_random_image(6, 6, seed=3)
        assert execute_blur({"amount": 2}, image) == image.blurred(2)

    def test_blur_requires_amount(self):
        with pytest.raises(ValueError):
            execute_blur({}, make_gradient_image(2, 2))

    def test_blur_rejects_negative_amount(self):
        with pytest.raises(ValueError):
            execute_blur({"amount": -3}, make_gradient_image(2, 2))

    def test_copy_of_slice(self):
        image = make_gradient_image(5, 5)
        with image.crop(1, 1, Dimensions(2, 2)) as region:
            result = execute_copy({}, region)
        assert result.dimensions == Dimensions(2, 2)
        assert result.get_pixel(0, 0) == image.get_pixel(1, 1)

    def test_executors_reject_non_image(self):
        with pytest.raises(TypeError):
            execute_greyscale({}, "not_an_image")


class TestRunOperations:
    """Tests for run_operations."""

    def test_crop_then_greyscale(self):
        image = make_gradient_image(8, 8)
        steps = [
            {"type": "Crop", "x": 2, "y": 2, "width": 3, "height": 3},
            {"type": "Greyscale"},
        ]

        result = run_operations(steps, image)

        with image.crop(2, 2, Dimensions(3, 3)) as region:
            expected = region.greyscale()
        assert result == expected

    def test_empty_steps_copy(self):
        image = make_gradient_image(3, 3)
        result = run_operations([], image)
        assert result == image
        assert result is not image

    def test_input_untouched(self):
        image = make_random_image(5, 5, seed=1)
        before = image.pixels()
        run_operations([{"type": "Flip", "horizontal": True}, {"type": "Blur", "amount": 2}], image)
        assert image.pixels() == before

    def test_missing_type(self):
        with pytest.raises(ValueError):
            run_operations([{"amount": 2}], make_gradient_image(2, 2))

    def test_unknown_operation(self):
        with pytest.raises(KeyError):
            run_operations([{"type": "Sharpen"}], make_gradient_image(2, 2))

    def test_custom_operations(self):
        operations = {"Mirror": lambda params, image: image.flipped(True, False)}
        image = make_gradient_image(3, 2)
        assert run_operations([{"type": "Mirror"}], image, operations=operations) == image.flipped(True, False)

    def test_executor_receives_params_without_type(self):
        executor = Mock(side_effect=lambda params, image: image.to_owned())
        run_operations([{"type": "Spy", "level": 3}], make_gradient_image(2, 2), operations={"Spy": executor})
        assert executor.call_args[0][0] == {"level": 3}
