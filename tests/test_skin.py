import unittest

import numpy as np

from face_analysis.schemas import RGB
from face_analysis.skin import is_skin_color, skin_mask


class SkinColorTests(unittest.TestCase):
    def test_black_is_not_skin(self) -> None:
        self.assertFalse(is_skin_color(RGB(r=0, g=0, b=0)))

    def test_typical_skin_is_skin(self) -> None:
        self.assertTrue(is_skin_color(RGB(r=200, g=80, b=60)))

    def test_accepts_plain_tuples(self) -> None:
        self.assertTrue(is_skin_color((200, 80, 60)))
        self.assertFalse(is_skin_color([255, 255, 255]))

    def test_each_rule_rejects(self) -> None:
        rejected = [
            (95, 50, 30),    # r must exceed 95
            (150, 40, 30),   # g must exceed 40
            (150, 60, 20),   # b must exceed 20
            (110, 100, 96),  # r-g spread too small
            (100, 120, 60),  # r must exceed g
            (150, 60, 160),  # r must exceed b
        ]
        for rgb in rejected:
            with self.subTest(rgb=rgb):
                self.assertFalse(is_skin_color(rgb))

    def test_is_deterministic(self) -> None:
        rgb = RGB(r=180, g=120, b=90)
        self.assertEqual(is_skin_color(rgb), is_skin_color(rgb))

    def test_mask_matches_scalar_rule(self) -> None:
        values = np.arange(0, 256, 17, dtype=np.uint8)
        r, g, b = np.meshgrid(values, values, values, indexing="ij")
        pixels = np.stack([r, g, b], axis=-1).reshape(-1, 3)

        mask = skin_mask(pixels)
        expected = [is_skin_color(tuple(int(c) for c in px)) for px in pixels]
        self.assertEqual(mask.tolist(), expected)

    def test_mask_keeps_image_shape(self) -> None:
        image = np.zeros((4, 6, 3), dtype=np.uint8)
        image[1, 2] = (200, 80, 60)
        mask = skin_mask(image)
        self.assertEqual(mask.shape, (4, 6))
        self.assertEqual(int(mask.sum()), 1)
        self.assertTrue(mask[1, 2])


if __name__ == "__main__":
    unittest.main()
