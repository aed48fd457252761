"""
Suppression passes that turn raw candidates into the final keypoint set.

The cross-scale pass runs first and consults the response maps of the
other scale levels; the spatial pass then collapses nearby duplicates.
Both passes return new tuples and never modify their inputs.
"""

import logging

import numpy as np

logger = logging.getLogger(__name__)


def cross_scale_suppression(candidates, response_maps, levels, margin):
    """
    Drop candidates that a finer scale explains much better.

    A candidate is removed when the response map of any smaller filter
    size, read at the candidate's location, exceeds the candidate's own
    response times the margin. Larger filter sizes never veto.

    Args:
        candidates: Sequence of Candidate
        response_maps: Response maps addressed by scale index
        levels: ScaleLevel per response map
        margin: Veto multiplier (>= 1)

    Returns:
        Tuple of surviving Candidate, input order preserved
    """
    kept = []

    for cand in candidates:
        vetoed = False
        for level in levels:
            if level.filter_size >= cand.filter_size:
                continue
            response = response_maps[level.index]
            height, width = response.shape
            if not level.contains(cand.x, cand.y, height, width):
                continue
            if response[cand.y, cand.x] > cand.response * margin:
                vetoed = True
                break

        if vetoed:
            logger.debug("Cross-scale veto of candidate at (%d, %d), filter size %d",
                         cand.x, cand.y, cand.filter_size)
        else:
            kept.append(cand)

    return tuple(kept)


def remove_clustered_keypoints(candidates, radius_factor):
    """
    Collapse duplicate detections of the same blob.

    Candidates are visited in order. A candidate is dropped when another
    candidate that is still kept lies closer than radius_factor times the
    visited candidate's filter size and has a strictly larger response.
    Once dropped, a candidate no longer suppresses anyone.

    Args:
        candidates: Sequence of Candidate
        radius_factor: Radius per unit filter size (> 0)

    Returns:
        Tuple of surviving Candidate, input order preserved
    """
    n = len(candidates)
    if n == 0:
        return ()

    xs = np.array([c.x for c in candidates], dtype=np.float64)
    ys = np.array([c.y for c in candidates], dtype=np.float64)
    responses = np.array([c.response for c in candidates], dtype=np.float64)
    keep = np.ones(n, dtype=bool)

    for i, cand in enumerate(candidates):
        if not keep[i]:
            continue
        radius = radius_factor * cand.filter_size
        dist_sq = (xs - xs[i]) ** 2 + (ys - ys[i]) ** 2
        stronger = keep & (dist_sq < radius ** 2) & (responses > responses[i])
        if np.any(stronger):
            keep[i] = False

    return tuple(c for c, k in zip(candidates, keep) if k)


def suppress(detection, config):
    """
    Run the cross-scale pass, then the spatial pass.

    Args:
        detection: DetectionResult from HessianDetector.detect()
        config: SurfConfig

    Returns:
        Tuple of Candidate forming the final keypoint set
    """
    survivors = cross_scale_suppression(
        detection.candidates, detection.response_maps, detection.levels,
        config.cross_scale_margin,
    )
    logger.debug("Cross-scale suppression kept %d of %d candidates",
                 len(survivors), len(detection.candidates))

    clustered = remove_clustered_keypoints(survivors, config.cluster_radius_factor)
    logger.debug("Spatial suppression kept %d of %d candidates",
                 len(clustered), len(survivors))

    return clustered
