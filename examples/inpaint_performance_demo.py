"""
Performance demonstration for Telea inpainting.

Times inpaint_telea on synthetic images of increasing size with both
reconstruction policies, and shows how much cropping to the mask's
bounding box saves when the damaged area is small.

Install dependencies:
    pip install -e .
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import time

import numpy as np
from PIL import Image

from OI_Libs.InpaintingLib import inpaint_telea


def make_test_case(size, hole_fraction):
    """Gradient image with a centered square hole covering ``hole_fraction`` of the side."""
    xs = np.linspace(0, 255, size, dtype=np.float64)
    gradient = np.zeros((size, size, 4), dtype=np.uint8)
    gradient[..., 0] = xs[np.newaxis, :]
    gradient[..., 1] = xs[:, np.newaxis]
    gradient[..., 2] = 128
    gradient[..., 3] = 255
    image = Image.fromarray(gradient, "RGBA")

    mask = np.zeros((size, size), dtype=bool)
    side = max(1, int(size * hole_fraction))
    start = (size - side) // 2
    mask[start:start + side, start:start + side] = True
    return image, mask


def time_call(image, mask, iterations=3, **kwargs):
    """Average seconds per call, excluding the first (warmup) run."""
    times = []
    for i in range(iterations):
        start = time.perf_counter()
        inpaint_telea(image, mask, **kwargs)
        elapsed = time.perf_counter() - start
        times.append(elapsed)
        label = " (warmup)" if i == 0 else ""
        print(f"  run {i + 1}: {elapsed:.3f}s{label}")
    rest = times[1:] or times
    return sum(rest) / len(rest)


def benchmark(size, radius, policy, hole_fraction=0.2):
    print(f"\nBenchmarking {size}x{size}, radius={radius}, policy={policy}")
    print("-" * 60)
    image, mask = make_test_case(size, hole_fraction)
    print(f"Masked pixels: {int(mask.sum())}")
    return time_call(image, mask, radius=radius, policy=policy)


def benchmark_cropping(size=400, radius=5):
    """Compare a small hole with and without bounding-box cropping."""
    print(f"\nCropping on {size}x{size} with a small hole")
    print("-" * 60)
    image, mask = make_test_case(size, 0.05)

    print("crop_to_mask=True")
    cropped = time_call(image, mask, radius=radius, crop_to_mask=True)
    print("crop_to_mask=False")
    full = time_call(image, mask, radius=radius, crop_to_mask=False)

    if cropped > 0:
        print(f"\nSpeedup from cropping: {full / cropped:.2f}x")


def main():
    """Run performance benchmarks."""
    print("=" * 60)
    print("Telea Inpainting Performance Demonstration")
    print("=" * 60)

    test_cases = [
        (100, 3, "on_freeze"),
        (200, 5, "on_freeze"),
        (200, 10, "on_freeze"),
        (200, 5, "on_revision"),
    ]

    results = []
    for size, radius, policy in test_cases:
        try:
            avg = benchmark(size, radius, policy)
            results.append((size, radius, policy, avg))
        except KeyboardInterrupt:
            print("\n\nBenchmark interrupted by user")
            break

    benchmark_cropping()

    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    print("Size       Radius  Policy        Average")
    print("-" * 60)
    for size, radius, policy, avg in results:
        print(f"{size:4d}x{size:<4d}  {radius:4d}   {policy:12s}  {avg:6.3f}s")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
