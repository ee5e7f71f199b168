"""Tests for Laplacian peak-response blur detection."""

import cv2
import numpy as np

from photocurate.sharpness.blur import (
    BlurAnalysis,
    analyze_blur,
    edge_response,
    max_edge_response,
    prepare_for_blur,
    to_greyscale,
)

from conftest import make_checkerboard, make_flat


class TestEdgeResponse:
    """Test edge_response and max_edge_response."""

    def test_flat_image_has_no_response(self):
        gray = np.full((20, 20), 128, dtype=np.uint8)
        response = edge_response(gray)
        assert response.shape == gray.shape
        assert response.dtype == np.uint8
        assert response.max() == 0

    def test_response_saturates(self):
        gray = np.zeros((9, 9), dtype=np.uint8)
        gray[4, 4] = 255
        response = edge_response(gray)
        # Centre goes negative and clips to 0; neighbours clip to 255
        assert response[4, 4] == 0
        assert response[3, 4] == 255
        assert response[4, 5] == 255

    def test_max_edge_response_of_checkerboard(self):
        assert max_edge_response(make_checkerboard()) == 255


class TestPrepareForBlur:
    """Test prepare_for_blur."""

    def test_large_image_is_shrunk_and_cropped(self):
        img = np.zeros((1000, 2000, 3), dtype=np.uint8)
        out = prepare_for_blur(img)
        # 2000x1000 -> 500x250 -> 125x125 centre square
        assert out.shape == (125, 125, 3)

    def test_greyscale_conversion(self):
        rgb = make_flat((255, 0, 0), 4, 4)
        gray = to_greyscale(rgb)
        assert gray.shape == (4, 4)
        assert gray[0, 0] == cv2.cvtColor(rgb, cv2.COLOR_RGB2GRAY)[0, 0]


class TestAnalyzeBlur:
    """Test analyze_blur."""

    def test_flat_image_is_blurry(self):
        result = analyze_blur(make_flat(200))
        assert isinstance(result, BlurAnalysis)
        assert result.max_response == 0
        assert result.is_blurry

    def test_checkerboard_is_sharp(self):
        result = analyze_blur(make_checkerboard())
        assert result.max_response >= 110
        assert not result.is_blurry

    def test_gaussian_blurred_gradient_is_blurry(self):
        ramp = np.tile(np.linspace(0, 255, 400).astype(np.uint8), (400, 1))
        blurred = cv2.GaussianBlur(np.stack([ramp] * 3, axis=-1), (31, 31), 10)
        assert analyze_blur(blurred).is_blurry
