from .errors        import FrameError,                   \
                           StructuralConfigurationError, \
                           InvalidStateError,            \
                           DegenerateTransformError

from .geometry      import Point3,     \
                           Vector3,    \
                           Quaternion, \
                           Transform

from .cache         import TransformCache
from .state         import State
from .frame         import Frame,        \
                           PoseConfig,   \
                           pose_to_conf, \
                           pose_from_conf
from .frames        import GroundedFrame, \
                           Ground,        \
                           AttachedFrame
from .model         import Model
