"""
Demo: Kernel Smoothing

Walks a noisy 3-D volume with KernelIterator-driven stencil filters and writes
before/after slices for each filter.

Usage:
    python experiments/demo_kernel_smoothing.py --radius 1 --save_dir experiments/outputs/smoothing
"""

import argparse
import logging
import sys
import time
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parent.parent))

import cv2  # noqa: E402
import matplotlib  # noqa: E402

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from ndgrid import NDStore, max_filter, mean_filter, median_filter, min_filter  # noqa: E402
from ndgrid.plotting import write_slice_image  # noqa: E402


def create_test_volume(size=(24, 48, 48), noise=0.3, seed=0):
    """Two bright blobs in a dark volume, plus Gaussian and salt noise."""
    rng = np.random.default_rng(seed)
    volume = np.zeros(size, dtype=np.float64)

    mid = size[0] // 2
    for ii in range(size[0]):
        plane = np.zeros(size[1:], dtype=np.uint8)
        scale = max(0, 12 - abs(ii - mid))
        if scale:
            cv2.circle(plane, (size[2] // 3, size[1] // 3), scale, 255, -1)
            cv2.rectangle(
                plane,
                (size[2] // 2, size[1] // 2),
                (size[2] // 2 + scale, size[1] // 2 + scale),
                160,
                -1,
            )
        volume[ii] = plane / 255.0

    volume += rng.normal(scale=noise, size=size)
    salt = rng.random(size) < 0.02
    volume[salt] = 1.5
    return volume


def main():
    parser = argparse.ArgumentParser(description="Stencil filters over a 3-D volume")
    parser.add_argument("--radius", type=int, default=1, help="Kernel radius on every axis")
    parser.add_argument("--noise", type=float, default=0.3, help="Gaussian noise level")
    parser.add_argument("--save_dir", type=str, default="experiments/outputs/smoothing")
    parser.add_argument("--verbose", action="store_true", help="Log iterator setup")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    save_dir = Path(args.save_dir)
    save_dir.mkdir(parents=True, exist_ok=True)

    print("=" * 60)
    print("Kernel Smoothing Demo")
    print("=" * 60)

    volume = create_test_volume(noise=args.noise)
    store = NDStore.from_array(volume)
    print(f"Volume: {store.size}, radius: {args.radius}\n")

    filters = [
        ("mean", mean_filter),
        ("median", median_filter),
        ("max", max_filter),
        ("min", min_filter),
    ]

    write_slice_image(save_dir / "input.png", volume)
    results = {"input": volume}
    for name, fn in filters:
        print(f"Running: {name}...")
        start = time.perf_counter()
        out = fn(store, args.radius)
        elapsed = time.perf_counter() - start
        print(f"  {elapsed:.2f}s, output range [{out.data.min():.2f}, {out.data.max():.2f}]")

        results[name] = out.as_array()
        write_slice_image(save_dir / f"{name}.png", results[name])

    fig, axes = plt.subplots(1, len(results), figsize=(4 * len(results), 4))
    mid = volume.shape[0] // 2
    for ax, (name, array) in zip(axes, results.items()):
        ax.imshow(array[mid], cmap="gray")
        ax.set_title(name)
        ax.axis("off")

    plt.tight_layout()
    save_path = save_dir / "comparison.png"
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\nSaved: {save_path}")


if __name__ == "__main__":
    main()
