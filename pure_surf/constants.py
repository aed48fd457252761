"""
SURF constants and default parameter values.

All magic numbers of the feature pipeline are centralized here.
"""

# =============================================================================
# Scale Space
# =============================================================================

# Filter size that defines scale 1.0 (scale = filter_size / BASE_FILTER_SIZE)
BASE_FILTER_SIZE = 9

# Ascending box-filter sizes; the image is never resampled
DEFAULT_FILTER_SIZES = (9, 15, 21, 27)

# Weight of the Lxy^2 term in the determinant approximation
HESSIAN_XY_WEIGHT = 0.81

# Intensities this far outside [0, 1] are rounding noise and get clipped
INTENSITY_TOLERANCE = 1e-6

# =============================================================================
# Detection Thresholds
# =============================================================================

# Response floor at the base scale, scaled by (base / fs)^4 per level
DEFAULT_THRESHOLD_BASE = 0.001

# A smaller-scale response this many times stronger vetoes a candidate
DEFAULT_CROSS_SCALE_MARGIN = 3.0

# Spatial suppression radius per unit filter size
DEFAULT_CLUSTER_RADIUS_FACTOR = 2.0

# Smallest same-scale non-maximum suppression radius (pixels)
MIN_NMS_RADIUS = 2

# =============================================================================
# Orientation Assignment
# =============================================================================

# Sampling disc radius in units of scale
ORIENTATION_RADIUS_FACTOR = 6

# Haar wavelet side length in units of scale
HAAR_SIZE_FACTOR = 2

# =============================================================================
# Descriptor
# =============================================================================

# Side of the square descriptor window in units of scale
DESCRIPTOR_WINDOW_FACTOR = 20

# Sub-regions per side of the descriptor window
DESCRIPTOR_GRID = 4

# Haar samples per side of each sub-region
DESCRIPTOR_SAMPLES = 5

# Sums accumulated per sub-region: dx, |dx|, dy, |dy|
DESCRIPTOR_SUMS = 4

DESCRIPTOR_LENGTH = DESCRIPTOR_GRID * DESCRIPTOR_GRID * DESCRIPTOR_SUMS
