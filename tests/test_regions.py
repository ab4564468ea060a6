import unittest

import numpy as np

from face_analysis.image import ImageBuffer
from face_analysis.regions import (
    FEATURE_REGIONS,
    average_color,
    feature_region,
    sample_feature,
)
from face_analysis.schemas import RGB, FaceRegion


class AverageColorTests(unittest.TestCase):
    def test_single_pixel_region(self) -> None:
        image = ImageBuffer(np.full((1, 1, 3), (12, 34, 56), dtype=np.uint8))
        self.assertEqual(average_color(image), RGB(r=12, g=34, b=56))

    def test_uses_stride_and_rounds_half_up(self) -> None:
        pixels = np.zeros((10, 10, 3), dtype=np.uint8)
        pixels[:, 5:] = 255
        image = ImageBuffer(pixels)

        # samples at columns 0 and 5 only: mean 127.5
        self.assertEqual(average_color(image, stride=5), RGB(r=128, g=128, b=128))
        # every column: 50/50 as well
        self.assertEqual(average_color(image, stride=1), RGB(r=128, g=128, b=128))

    def test_channels_averaged_independently(self) -> None:
        pixels = np.zeros((2, 1, 3), dtype=np.uint8)
        pixels[0, 0] = (10, 200, 0)
        pixels[1, 0] = (20, 100, 3)
        self.assertEqual(average_color(ImageBuffer(pixels), stride=1), RGB(r=15, g=150, b=2))

    def test_empty_region_raises(self) -> None:
        image = ImageBuffer(np.zeros((0, 5, 3), dtype=np.uint8))
        with self.assertRaises(ValueError):
            average_color(image)


class FeatureRegionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.image = ImageBuffer(np.zeros((500, 500, 3), dtype=np.uint8))
        self.face = FaceRegion(x=100, y=50, width=200, height=300)

    def test_hair_uses_top_of_full_image(self) -> None:
        rect = feature_region("hair", self.face, self.image)
        self.assertEqual(rect, FaceRegion(x=0, y=0, width=500, height=150))

    def test_face_relative_regions(self) -> None:
        expected = {
            "skin": FaceRegion(x=140, y=140, width=120, height=120),
            "eyes": FaceRegion(x=150, y=125, width=100, height=60),
            "lips": FaceRegion(x=170, y=245, width=60, height=45),
        }
        for name, rect in expected.items():
            with self.subTest(feature=name):
                self.assertEqual(feature_region(name, self.face, self.image), rect)

    def test_tiny_face_still_yields_a_pixel(self) -> None:
        image = ImageBuffer(np.zeros((3, 3, 3), dtype=np.uint8))
        face = FaceRegion(x=2, y=2, width=1, height=1)
        for name in FEATURE_REGIONS:
            with self.subTest(feature=name):
                rect = feature_region(name, face, image)
                self.assertGreaterEqual(rect.width, 1)
                self.assertGreaterEqual(rect.height, 1)
                self.assertLessEqual(rect.right, image.width)
                self.assertLessEqual(rect.bottom, image.height)

    def test_unknown_feature(self) -> None:
        with self.assertRaises(KeyError):
            feature_region("nose", self.face, self.image)

    def test_table_is_read_only(self) -> None:
        with self.assertRaises(TypeError):
            FEATURE_REGIONS["nose"] = FEATURE_REGIONS["lips"]  # type: ignore[index]

    def test_sample_feature_reads_the_right_pixels(self) -> None:
        pixels = np.zeros((500, 500, 3), dtype=np.uint8)
        pixels[245:290, 170:230] = (220, 100, 120)
        image = ImageBuffer(pixels)
        self.assertEqual(
            sample_feature("lips", self.face, image), RGB(r=220, g=100, b=120)
        )


if __name__ == "__main__":
    unittest.main()
