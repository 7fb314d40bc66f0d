import itertools
import logging

from .cache    import TransformCache
from .errors   import InvalidStateError
from .geometry import Transform


logger = logging.getLogger(__name__)

# Shared by all states so that no two configurations carry the same stamp
_STAMPS = itertools.count()


class State(object):
    """Versioned snapshot of the poses of a model's grounded frames.

    Every mutation draws a new stamp. Ground transforms computed for this state
    are memoized in its cache and live as long as the state does.
    """
    def __init__(self, model_key, poses):
        self._model_key = model_key
        self._poses     = {n: Transform(p.position, p.quaternion) for n, p in poses.items()}
        self._stamp     = next(_STAMPS)
        self._cache     = TransformCache()

    @property
    def stamp(self):
        """Returns the version of this state's configuration.

        :rtype: int
        """
        return self._stamp

    @property
    def model_key(self):
        return self._model_key

    @property
    def cache(self) -> TransformCache:
        return self._cache

    @property
    def body_names(self):
        return list(self._poses.keys())

    def check_model(self, model):
        """Raises an InvalidStateError if this state was not created by `model`."""
        if model is None or model.key != self._model_key:
            raise InvalidStateError(f'State with stamp {self._stamp} was created for model {self._model_key}, '
                                    f'not for model {None if model is None else model.key}.')

    def get_body_pose(self, name) -> Transform:
        if name not in self._poses:
            raise InvalidStateError(f'State with stamp {self._stamp} holds no pose for "{name}". '
                                    f'Known bodies: {", ".join(self._poses.keys())}')
        return self._poses[name]

    def set_body_pose(self, name, pose : Transform):
        if name not in self._poses:
            raise InvalidStateError(f'State with stamp {self._stamp} holds no pose for "{name}". '
                                    f'Known bodies: {", ".join(self._poses.keys())}')
        self._poses[name] = Transform(pose.position, pose.quaternion)
        self._stamp = next(_STAMPS)
        logger.debug('Pose of "%s" updated, new stamp %d', name, self._stamp)

    def copy(self):
        return State(self._model_key, self._poses)

    def __repr__(self):
        return f'State(model={self._model_key}, stamp={self._stamp})'
