"""Line thinning for binary images, with threshold and edge detection preprocessing.

The thinning algorithms follow Zhang & Suen (1984), "A fast parallel algorithm
for thinning digital patterns", and Chen & Hsu (1988), "A modified fast
parallel algorithm for thinning digital patterns".
"""

from thinline.errors import InvalidArgument
from thinline.types import EdgeOperator, ForegroundPolarity, MarkingMethod, ThinningResult, ThinningState
from thinline.vision.edge_detection import detect_edges, gradient_magnitude
from thinline.vision.thinning import thin_image_edges
from thinline.vision.threshold import threshold

__version__ = "0.1.0"

__all__ = [
    "EdgeOperator",
    "ForegroundPolarity",
    "InvalidArgument",
    "MarkingMethod",
    "ThinningResult",
    "ThinningState",
    "__version__",
    "detect_edges",
    "gradient_magnitude",
    "thin_image_edges",
    "threshold",
]
