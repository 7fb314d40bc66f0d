from dataclasses import dataclass, field
from omegaconf   import DictConfig

from .errors   import StructuralConfigurationError
from .frame    import Frame,        \
                      PoseConfig,   \
                      pose_to_conf
from .geometry import Transform


class GroundedFrame(Frame):
    """Frame whose pose relative to ground is read directly from the state,
    e.g. the frame of a simulated rigid body. It is its own base frame.
    """
    @dataclass
    class Config(Frame.Config):
        type         : str = 'grounded'
        initial_pose : PoseConfig = field(default_factory=PoseConfig)

    def __init__(self, name, initial_pose=Transform.identity()):
        super().__init__(name)
        self._initial_pose = initial_pose
        self._conf_type    = GroundedFrame.Config

    @property
    def initial_pose(self) -> Transform:
        return self._initial_pose

    def calc_ground_transform(self, state) -> Transform:
        return state.get_body_pose(self._name)

    def extend_find_base_frame(self):
        return self

    def extend_find_transform_in_base_frame(self) -> Transform:
        return Transform.identity()

    def conf(self) -> DictConfig:
        out = super().conf()
        out.initial_pose = pose_to_conf(self._initial_pose)
        return out


class Ground(GroundedFrame):
    """The global frame all other frames are ultimately expressed against."""
    @dataclass
    class Config(GroundedFrame.Config):
        type : str = 'ground'

    NAME = 'ground'

    def __init__(self):
        super().__init__(Ground.NAME)
        self._conf_type = Ground.Config

    def calc_ground_transform(self, state) -> Transform:
        return Transform.identity()


class AttachedFrame(Frame):
    """Frame rigidly attached to a parent frame at a fixed offset X_PF.

    The parent can be given as a frame or by name. It is resolved to an index
    into the model's arena when the model is finalized.
    """
    @dataclass
    class Config(Frame.Config):
        type   : str = 'attached'
        parent : str = ''
        offset : PoseConfig = field(default_factory=PoseConfig)

    def __init__(self, name, parent=None, offset=Transform.identity()):
        super().__init__(name)
        self._parent_ref   = parent
        self._parent_index = None
        self._offset       = offset
        self._conf_type    = AttachedFrame.Config

    @property
    def offset(self) -> Transform:
        return self._offset

    @property
    def parent_name(self):
        if isinstance(self._parent_ref, Frame):
            return self._parent_ref.name
        return self._parent_ref

    @property
    def parent(self) -> Frame:
        if self._parent_index is None:
            raise StructuralConfigurationError(f'Parent of frame "{self._name}" is not resolved. Finalize its model first.')
        return self._model.get_frame(self._parent_index)

    def connect_to_parent(self, parent):
        """Sets the parent frame. Only possible before the model is finalized."""
        if self._model is not None and self._model.is_finalized:
            raise StructuralConfigurationError(f'Can not reparent frame "{self._name}" of a finalized model.')
        self._parent_ref = parent

    def _resolve_parent(self, model):
        """Returns the arena index of this frame's parent in `model`."""
        if self._parent_ref is None:
            raise StructuralConfigurationError(f'Frame "{self._name}" has no parent.')

        if isinstance(self._parent_ref, Frame):
            if self._parent_ref.model is not model:
                raise StructuralConfigurationError(f'Parent "{self._parent_ref.name}" of frame "{self._name}" '
                                                   'is not part of the same model.')
            return self._parent_ref.index

        if self._parent_ref not in model:
            raise StructuralConfigurationError(f'Parent "{self._parent_ref}" of frame "{self._name}" '
                                               'can not be found.')
        return model.get_frame(self._parent_ref).index

    def _set_parent_index(self, index):
        self._parent_index = index

    def calc_ground_transform(self, state) -> Transform:
        return self.parent.get_ground_transform(state).dot(self._offset)

    def extend_find_base_frame(self):
        return self.parent.find_base_frame()

    def extend_find_transform_in_base_frame(self) -> Transform:
        return self.parent.find_transform_in_base_frame().dot(self._offset)

    def conf(self) -> DictConfig:
        out = super().conf()
        out.parent = self.parent_name
        out.offset = pose_to_conf(self._offset)
        return out
