"""Tests for the classification facade."""

import numpy as np
import pytest

from photocurate.classifier import PhotoClassifier, is_dark, is_decorated
from photocurate.errors import DecodeFailure, NumericFault, PreconditionViolation, Verdict
from photocurate.histogram.calc import compute_histogram
from photocurate.histogram.compare import BoardType, CompareMetric
from photocurate.media.display import StaticDisplayGeometry

from conftest import make_checkerboard, make_flat, make_noise


# --- Fixtures ---


@pytest.fixture
def classifier():
    return PhotoClassifier()


@pytest.fixture
def black_png(write_image):
    return write_image(make_flat(0), "black.png")


@pytest.fixture
def white_png(write_image):
    return write_image(make_flat(255), "white.png")


@pytest.fixture
def flat_grey_png(write_image):
    return write_image(make_flat(200), "grey.png")


@pytest.fixture
def checker_png(write_image):
    return write_image(make_checkerboard(), "checker.png")


@pytest.fixture
def noise_pngs(write_image):
    return (
        write_image(make_noise(seed=1), "noise1.png"),
        write_image(make_noise(seed=1), "noise1_copy.png"),
        write_image(make_noise(seed=2), "noise2.png"),
    )


class FakeVideoMetadata:
    def __init__(self, duration_ms=None, error=None):
        self._duration = duration_ms
        self._error = error

    def duration_ms(self, path):
        if self._error:
            raise self._error
        return self._duration


# --- Unit Tests ---


class TestVerdict:
    """Test the Verdict result type."""

    def test_truthiness_and_evaluated(self):
        assert Verdict(True)
        assert not Verdict(False)
        assert Verdict(False).evaluated
        assert not Verdict(False, DecodeFailure("x")).evaluated


class TestDark:
    """Test dark detection through the facade."""

    def test_black_is_dark(self, classifier, black_png):
        assert classifier.is_dark(black_png)

    def test_white_is_not_dark(self, classifier, white_png):
        verdict = classifier.check_dark(white_png)
        assert not verdict.detected
        assert verdict.evaluated

    def test_missing_file_is_safe_default(self, classifier, tmp_path):
        verdict = classifier.check_dark(tmp_path / "missing.jpg")
        assert not verdict.detected
        assert isinstance(verdict.fault, DecodeFailure)

    def test_corrupt_file_is_safe_default(self, classifier, tmp_path):
        path = tmp_path / "corrupt.jpg"
        path.write_bytes(b"not a jpeg at all")
        verdict = classifier.check_dark(path)
        assert not verdict.detected
        assert isinstance(verdict.fault, DecodeFailure)

    def test_numeric_fault_is_safe_default(self):
        classifier = PhotoClassifier(decoder=lambda path: np.zeros((0, 0, 3), dtype=np.uint8))
        verdict = classifier.check_dark("anything.png")
        assert not verdict.detected
        assert isinstance(verdict.fault, NumericFault)

    def test_decoder_returning_none_is_safe_default(self):
        classifier = PhotoClassifier(decoder=lambda path: None)
        for verdict in (
            classifier.check_dark("x.png"),
            classifier.check_blur("x.png"),
            classifier.check_similar("x.png", "y.png"),
        ):
            assert not verdict.detected
            assert isinstance(verdict.fault, DecodeFailure)

    def test_module_level_shortcut(self, black_png):
        assert is_dark(black_png)
        assert is_dark(str(black_png))


class TestBlur:
    """Test blur detection through the facade."""

    def test_flat_image_is_blurry(self, classifier, flat_grey_png):
        assert classifier.is_blur(flat_grey_png)

    def test_checkerboard_is_not_blurry(self, classifier, checker_png):
        assert not classifier.is_blur(checker_png)

    def test_dark_image_is_never_blurry(self, classifier, black_png):
        verdict = classifier.check_blur(black_png)
        assert not verdict.detected
        assert verdict.evaluated

    def test_missing_file(self, classifier, tmp_path):
        assert not classifier.is_blur(tmp_path / "missing.png")


class TestSimilar:
    """Test near-duplicate detection through the facade."""

    def test_exact_copy_is_similar(self, classifier, noise_pngs):
        original, copy, _ = noise_pngs
        assert classifier.is_similar(original, copy)

    def test_unrelated_noise_is_not_similar(self, classifier, noise_pngs):
        original, _, other = noise_pngs
        assert not classifier.is_similar(original, other)

    def test_dark_images_are_never_similar(self, classifier, black_png, write_image):
        other_black = write_image(make_flat(0), "black2.png")
        assert not classifier.is_similar(black_png, other_black)

    def test_dark_comparison_short_circuits(self, classifier, noise_pngs, black_png):
        original, _, _ = noise_pngs
        verdict = classifier.check_similar(original, black_png)
        assert not verdict.detected
        assert verdict.evaluated

    def test_unreadable_comparison(self, classifier, noise_pngs, tmp_path):
        original, _, _ = noise_pngs
        verdict = classifier.check_similar(original, tmp_path / "missing.png")
        assert isinstance(verdict.fault, DecodeFailure)


class TestMemo:
    """Test memo detection through the facade."""

    def test_own_baseline_is_memo(self, classifier, noise_pngs):
        original, _, _ = noise_pngs
        baseline = compute_histogram(make_noise(seed=1))
        for board in BoardType:
            assert classifier.is_memo(original, CompareMetric.CORRELATION, board, [baseline])

    def test_empty_baselines_fail_fast(self, classifier, noise_pngs):
        original, _, _ = noise_pngs
        with pytest.raises(PreconditionViolation):
            classifier.is_memo(original, CompareMetric.CORRELATION, BoardType.DARK, [])

    def test_empty_baselines_fail_fast_even_for_missing_file(self, classifier, tmp_path):
        with pytest.raises(PreconditionViolation):
            classifier.check_memo(tmp_path / "missing.png", "correlation", "dark", [])

    def test_missing_file_is_safe_default(self, classifier, tmp_path):
        baseline = compute_histogram(make_noise())
        verdict = classifier.check_memo(tmp_path / "missing.png", "intersection", "white", [baseline])
        assert not verdict.detected
        assert isinstance(verdict.fault, DecodeFailure)


class TestDecorated:
    """Test the editing-app naming heuristic."""

    @pytest.mark.parametrize("path", [
        "/sdcard/Pictures/BeautyPlus/IMG_0001.jpg",
        "/sdcard/Pictures/Instagram/IMG_0002.jpg",
        "/storage/aillis_20240101.jpg",
    ])
    def test_known_apps(self, path):
        assert is_decorated(path)

    def test_plain_camera_photo(self, classifier):
        assert not classifier.is_decorated("/sdcard/DCIM/Camera/IMG_0003.jpg")

    def test_match_is_case_sensitive(self, classifier):
        assert not classifier.is_decorated("/sdcard/instagram/IMG_0004.jpg")


class TestScreenshot:
    """Test screenshot detection."""

    def test_png_matching_display(self, classifier, write_image):
        path = write_image(make_flat(128, height=64, width=32), "Screenshot.PNG")
        assert classifier.is_screenshot(path, StaticDisplayGeometry(width=32, height=64))

    def test_png_other_size(self, classifier, write_image):
        path = write_image(make_flat(128, height=64, width=32), "shot.png")
        assert not classifier.is_screenshot(path, StaticDisplayGeometry(width=64, height=32))

    def test_jpeg_is_never_screenshot(self, classifier, write_image):
        path = write_image(make_flat(128, height=64, width=32), "shot.jpg")
        verdict = classifier.check_screenshot(path, StaticDisplayGeometry(width=32, height=64))
        assert not verdict.detected
        assert verdict.evaluated

    def test_missing_png(self, classifier, tmp_path):
        verdict = classifier.check_screenshot(tmp_path / "gone.png", StaticDisplayGeometry(1, 1))
        assert isinstance(verdict.fault, DecodeFailure)


class TestShortVideo:
    """Test short-video detection."""

    @pytest.fixture
    def video_file(self, tmp_path):
        path = tmp_path / "clip.mp4"
        path.write_bytes(b"\x00")
        return path

    @pytest.mark.parametrize("duration,expected", [
        (999, False),
        (1000, True),
        (1999, True),
        (2000, False),
    ])
    def test_whole_seconds_equal_one(self, classifier, video_file, duration, expected):
        provider = FakeVideoMetadata(duration_ms=duration)
        assert classifier.is_short_video(video_file, provider) is expected

    def test_missing_file(self, classifier, tmp_path):
        provider = FakeVideoMetadata(duration_ms=1000)
        verdict = classifier.check_short_video(tmp_path / "missing.mp4", provider)
        assert not verdict.detected
        assert isinstance(verdict.fault, DecodeFailure)

    def test_provider_failure_is_safe_default(self, classifier, video_file):
        provider = FakeVideoMetadata(error=DecodeFailure("no metadata"))
        assert not classifier.is_short_video(video_file, provider)

    def test_provider_returning_none(self, classifier, video_file):
        verdict = classifier.check_short_video(video_file, FakeVideoMetadata(duration_ms=None))
        assert not verdict.detected
        assert isinstance(verdict.fault, DecodeFailure)

    def test_unparseable_duration(self, classifier, video_file):
        provider = FakeVideoMetadata(error=ValueError("invalid literal for int()"))
        verdict = classifier.check_short_video(video_file, provider)
        assert isinstance(verdict.fault, NumericFault)

    def test_default_provider_rejects_garbage(self, classifier, video_file):
        verdict = classifier.check_short_video(video_file)
        assert not verdict.detected
        assert not verdict.evaluated
