import itertools
import logging
import numpy as np

from omegaconf import DictConfig, OmegaConf

from .errors import StructuralConfigurationError
from .frame  import Frame,          \
                    pose_from_conf
from .frames import AttachedFrame,  \
                    Ground,         \
                    GroundedFrame
from .state  import State


logger = logging.getLogger(__name__)

_MODEL_KEYS = itertools.count()


class Model(object):
    """Owns an arena of frames and freezes their topology.

    Frames are added and wired while the model is being assembled. `finalize`
    resolves the parents of all attached frames to arena indices and rejects
    incomplete or cyclic topologies. Only a finalized model hands out states.
    """
    def __init__(self):
        self._key       = next(_MODEL_KEYS)
        self._frames    = []
        self._name_map  = {}
        self._finalized = False
        self.add_frame(Ground())

    @property
    def key(self):
        return self._key

    @property
    def ground(self) -> Ground:
        return self._frames[0]

    @property
    def frames(self):
        return list(self._frames)

    @property
    def is_finalized(self):
        return self._finalized

    def add_frame(self, frame : Frame) -> Frame:
        """Adds a frame to the arena of this model.

        :param frame: Frame to add
        :type  frame: Frame
        :return: The added frame
        :rtype: Frame
        """
        if self._finalized:
            raise StructuralConfigurationError(f'Can not add frame "{frame.name}" to a finalized model.')
        if frame.name in self._name_map:
            raise StructuralConfigurationError(f'Frame name "{frame.name}" is already taken.')

        frame._on_added(self, len(self._frames))
        self._name_map[frame.name] = frame.index
        self._frames.append(frame)
        return frame

    def get_frame(self, key) -> Frame:
        """Returns a frame by name or by arena index."""
        if isinstance(key, (int, np.integer)):
            if not 0 <= key < len(self._frames):
                raise IndexError(f'Frame index {key} is out of range, model holds {len(self._frames)} frames.')
            return self._frames[int(key)]
        if key not in self._name_map:
            raise KeyError(f'Unknown frame "{key}". Known frames: {", ".join(self._name_map.keys())}')
        return self._frames[self._name_map[key]]

    def finalize(self):
        """Resolves and validates the frame topology and freezes it."""
        if self._finalized:
            return

        parents = {}
        for f in self._frames:
            if isinstance(f, AttachedFrame):
                parents[f.index] = f._resolve_parent(self)

        for idx in parents:
            visited = {idx}
            current = parents[idx]
            while current in parents:
                if current in visited:
                    raise StructuralConfigurationError(f'Frame "{self._frames[idx].name}" is part of a cycle '
                                                       f'in the frame topology.')
                visited.add(current)
                current = parents[current]

        for idx, parent_idx in parents.items():
            self._frames[idx]._set_parent_index(parent_idx)

        self._finalized = True
        logger.debug('Finalized model %d with %d frames', self._key, len(self._frames))

    def init_state(self) -> State:
        """Creates a state holding the initial poses of all grounded frames."""
        if not self._finalized:
            raise StructuralConfigurationError('Model needs to be finalized before a state can be created.')

        poses = {f.name: f.initial_pose for f in self._frames
                 if isinstance(f, GroundedFrame) and not isinstance(f, Ground)}
        state = State(self._key, poses)
        logger.debug('Created state %d for model %d', state.stamp, self._key)
        return state

    def conf(self) -> DictConfig:
        return OmegaConf.create({'frames': [OmegaConf.to_container(f.conf()) for f in self._frames[1:]]})

    @classmethod
    def from_conf(cls, conf):
        """Assembles and finalizes a model from a frame topology description.

        :param conf: Description as produced by `Model.conf`
        :type  conf: dict, DictConfig or YAML string
        :rtype: Model
        """
        conf  = OmegaConf.create(conf)
        model = cls()
        if 'frames' not in conf:
            raise StructuralConfigurationError('Field "frames" is missing in model configuration.')
        if not OmegaConf.is_list(conf.frames):
            raise StructuralConfigurationError('Field "frames" in model configuration needs to be a list.')

        for fd in conf.frames:
            ftype = fd.get('type', None)
            if ftype == 'ground':
                continue
            elif ftype == 'grounded':
                fd = OmegaConf.merge(OmegaConf.structured(GroundedFrame.Config), fd)
                model.add_frame(GroundedFrame(fd.name, pose_from_conf(fd.initial_pose)))
            elif ftype == 'attached':
                fd = OmegaConf.merge(OmegaConf.structured(AttachedFrame.Config), fd)
                model.add_frame(AttachedFrame(fd.name, fd.parent or None, pose_from_conf(fd.offset)))
            else:
                raise StructuralConfigurationError(f'Unknown frame type "{ftype}". Options are: grounded, attached')

        model.finalize()
        return model

    def __contains__(self, name):
        return name in self._name_map

    def __len__(self):
        return len(self._frames)

    def __iter__(self):
        return iter(self._frames)
