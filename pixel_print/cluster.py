from __future__ import annotations

"""
Palette clustering.

Bounded k-means over pixel colours in RGB with a deterministic seeding scheme,
so identical inputs always produce identical clusters.

Exports:
  kmeans_sample_indices(total) -> IndexArray
  assign_nearest(rgb, centers) -> np.ndarray
  cluster_palette(buffer, k, *, debug=False) -> ClusterModel
"""

import time
from typing import List

import numpy as np

from .constants import (
    KMEANS_ASSIGN_CHUNK,
    KMEANS_INIT_STRIDE,
    KMEANS_MAX_ROUNDS,
    KMEANS_RESEED_STRIDE,
    KMEANS_SAMPLE_MAX,
)
from .core_types import ClusterModel, IndexArray, PixelBuffer, U8Rows
from .utils import (
    debug_log,
    format_seconds_compact,
    group_indices_by_label,
    key_value_pairs_to_string,
    split_range,
)


def kmeans_sample_indices(total: int) -> IndexArray:
    """Fixed-stride sample of at most KMEANS_SAMPLE_MAX pixel indices."""
    if total <= KMEANS_SAMPLE_MAX:
        return np.arange(total, dtype=np.int64)
    stride = total // KMEANS_SAMPLE_MAX
    return np.arange(0, total, stride, dtype=np.int64)[:KMEANS_SAMPLE_MAX]


def assign_nearest(
    rgb: np.ndarray, centers: np.ndarray, chunk: int = KMEANS_ASSIGN_CHUNK
) -> np.ndarray:
    """
    Nearest center per row by squared Euclidean distance.

    argmin keeps the first minimum, so ties go to the lowest center index.
    Rows are processed in blocks to bound the (rows, k) distance matrix.
    """
    labels = np.empty((rgb.shape[0],), dtype=np.int64)
    ctr = centers.astype(np.int32, copy=False)
    for start, end in split_range(rgb.shape[0], chunk):
        block = rgb[start:end].astype(np.int32, copy=False)
        diff = block[:, None, :] - ctr[None, :, :]
        dist2 = np.sum(diff * diff, axis=2)
        labels[start:end] = np.argmin(dist2, axis=1)
    return labels


def _rounded_means(rgb: np.ndarray, labels: np.ndarray, k: int) -> np.ndarray:
    """Per-cluster mean RGB, half rounded up; rows of empty clusters are 0."""
    counts = np.bincount(labels, minlength=k).astype(np.float64)
    means = np.zeros((k, 3), dtype=np.int32)
    filled = counts > 0
    for ch in range(3):
        sums = np.bincount(labels, weights=rgb[:, ch].astype(np.float64), minlength=k)
        means[filled, ch] = np.floor(sums[filled] / counts[filled] + 0.5).astype(
            np.int32
        )
    return means


def cluster_palette(buffer: PixelBuffer, k: int, *, debug: bool = False) -> ClusterModel:
    """
    Partition the pixels of `buffer` into k colour clusters.

    Steps:
      1) sample at most KMEANS_SAMPLE_MAX pixels at a fixed stride
      2) seed center c from sample[(c * 997) % S]
      3) up to KMEANS_MAX_ROUNDS rounds of assign -> mean update; an empty
         cluster is reseeded from sample[(c * 811) % S]; stop once no center
         moved
    Returns centers (k,3) uint8 and members grouped in scan order.
    """
    k = int(k)
    if k <= 0:
        raise ValueError(f"cluster count must be positive, got {k}")

    t0 = time.perf_counter()
    rgb: U8Rows = buffer.rgb
    total = int(rgb.shape[0])
    sample = kmeans_sample_indices(total)
    n_sample = int(sample.size)
    seed_rows = sample[(np.arange(k, dtype=np.int64) * KMEANS_INIT_STRIDE) % n_sample]
    centers = rgb[seed_rows].astype(np.int32)

    labels = np.zeros((total,), dtype=np.int64)
    reseeded: List[int] = []
    rounds = 0
    converged = False
    for _round in range(KMEANS_MAX_ROUNDS):
        rounds += 1
        labels = assign_nearest(rgb, centers)
        updated = _rounded_means(rgb, labels, k)

        counts = np.bincount(labels, minlength=k)
        reseeded = [int(c) for c in np.flatnonzero(counts == 0)]
        for c in reseeded:
            updated[c] = rgb[sample[(c * KMEANS_RESEED_STRIDE) % n_sample]]

        moved = bool(np.any(updated != centers))
        centers = updated
        if not moved:
            converged = True
            break

    members = group_indices_by_label(labels, k)
    model = ClusterModel(
        centers=centers.astype(np.uint8),
        members=members,
        rounds=rounds,
        converged=converged,
        reseeded=tuple(reseeded),
    )
    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("k-means k", k),
                    ("Pixels", total),
                    ("Sample", n_sample),
                    ("Rounds", rounds),
                    ("Converged", converged),
                    ("Reseeded", len(reseeded)),
                    ("Time", format_seconds_compact(time.perf_counter() - t0)),
                ]
            )
        )
    return model


__all__ = ["kmeans_sample_indices", "assign_nearest", "cluster_palette"]
