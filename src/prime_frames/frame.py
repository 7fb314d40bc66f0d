from dataclasses import dataclass, field
from omegaconf   import DictConfig, OmegaConf
from typing      import List

from .errors   import StructuralConfigurationError
from .geometry import Point3,     \
                      Quaternion, \
                      Vector3,    \
                      Transform


@dataclass
class PoseConfig:
    position : List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    rotation : List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0, 1.0])


def pose_to_conf(pose : Transform) -> PoseConfig:
    return PoseConfig(list(pose.position), list(pose.quaternion))


def pose_from_conf(conf) -> Transform:
    return Transform(Point3(*conf.position), Quaternion(*conf.rotation))


class Frame(object):
    """A right-handed set of orthogonal axes whose pose relative to ground
    depends on a state.

    Frames are owned by a `Model`, which assigns each one an index in its arena.
    The spatial queries take the state explicitly and return values, the
    ancestry queries only depend on the model's topology.

    Notation: X_GF maps quantities expressed in this frame F into ground G,
    i.e. ``p_G = X_GF.dot(p_F)``.
    """
    @dataclass
    class Config:
        name : str = ''
        type : str = ''

    def __init__(self, name):
        self._name  = name
        self._model = None
        self._index = None
        self._conf_type = Frame.Config

    @property
    def name(self):
        return self._name

    @property
    def model(self):
        return self._model

    @property
    def index(self):
        """Returns the index of this frame in its model's arena.

        :rtype: int
        """
        return self._index

    def _on_added(self, model, index):
        if self._model is not None:
            raise StructuralConfigurationError(f'Frame "{self._name}" already belongs to a model.')
        self._model = model
        self._index = index

    def _check_finalized(self):
        if self._model is None:
            raise StructuralConfigurationError(f'Frame "{self._name}" has not been added to a model.')
        if not self._model.is_finalized:
            raise StructuralConfigurationError(f'Model of frame "{self._name}" needs to be finalized before it can be queried.')

    def get_ground_transform(self, state) -> Transform:
        """Returns X_GF, the transform of this frame relative to ground.

        The result is memoized under the state's stamp.

        :param state: State of the model the frame belongs to.
        :type  state: prime_frames.state.State
        :rtype: Transform
        """
        self._check_finalized()
        state.check_model(self._model)
        return state.cache.lookup(self._index, state.stamp,
                                  lambda: self.calc_ground_transform(state))

    def find_transform_between(self, state, other) -> Transform:
        """Returns X_AF, the transform of this frame (F) relative to `other` (A).

        Ground acts as the pivot: X_AF = inv(X_GA) * X_GF.

        :type  other: Frame
        :rtype: Transform
        """
        X_GF = self.get_ground_transform(state)
        X_GA = other.get_ground_transform(state)
        return X_GA.inv().dot(X_GF)

    def express_vector_in_another_frame(self, state, vec, other) -> Vector3:
        """Re-expresses a vector given in this frame in `other`.

        Only the rotation between the frames is applied, the vector is not
        translated. Use this for direction-like quantities such as angular
        velocities.
        """
        return self.find_transform_between(state, other).dot(Vector3(*vec))

    def find_location_in_another_frame(self, state, point, other) -> Point3:
        """Returns the location in `other` of a point located and expressed in
        this frame, using the homogeneous transform X_AF.
        """
        return self.find_transform_between(state, other).dot(Point3(*point))

    def express_vector_in_ground(self, state, vec) -> Vector3:
        return self.get_ground_transform(state).dot(Vector3(*vec))

    def find_location_in_ground(self, state, point) -> Point3:
        return self.get_ground_transform(state).dot(Point3(*point))

    def get_position_in_ground(self, state) -> Point3:
        return self.get_ground_transform(state).position

    def get_rotation_in_ground(self, state) -> Quaternion:
        return self.get_ground_transform(state).quaternion

    def find_base_frame(self):
        """Returns the furthest ancestor of this frame which shares its angular
        velocity, i.e. represents the same rigid entity. A base frame is its
        own base.

        :rtype: Frame
        """
        self._check_finalized()
        return self.extend_find_base_frame()

    def find_transform_in_base_frame(self) -> Transform:
        """Returns X_BF, the transform of this frame in its base frame B.
        For a base frame this is the identity.
        """
        if self.find_base_frame() is self:
            return Transform.identity()
        return self.extend_find_transform_in_base_frame()

    def calc_ground_transform(self, state) -> Transform:
        raise NotImplementedError

    def extend_find_base_frame(self):
        raise NotImplementedError

    def extend_find_transform_in_base_frame(self) -> Transform:
        raise NotImplementedError

    def conf(self) -> DictConfig:
        out = OmegaConf.structured(self._conf_type)
        out.name = self._name
        return out

    def __repr__(self):
        return f'{type(self).__name__}("{self._name}")'
