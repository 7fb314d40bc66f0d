import numpy as np
import pytest

from prime_frames import AttachedFrame, \
                         GroundedFrame, \
                         Model,         \
                         Quaternion,    \
                         Transform,     \
                         Vector3


@pytest.fixture()
def model() -> Model:
    """Two bodies and a few offset frames attached to them.

    ground
    |- pelvis (grounded)
    |  |- hip (attached)
    |     |- marker (attached)
    |- femur (grounded)
    |  |- knee (attached)
    |- world_marker (attached to ground)
    """
    model  = Model()
    pelvis = model.add_frame(GroundedFrame('pelvis', Transform.from_xyz_rpy(0.1, 0.9, 0.2, 0.0, 0.1, 0.3)))
    femur  = model.add_frame(GroundedFrame('femur',  Transform.from_xyz_rpy(-0.3, 0.5, 0.1, 0.4, -0.2, 1.1)))
    hip    = model.add_frame(AttachedFrame('hip', pelvis, Transform.from_xyz_rpy(0.0, -0.1, 0.08, 0.2, 0.0, -0.5)))
    model.add_frame(AttachedFrame('marker', hip, Transform.from_xyz(0.02, 0.0, 0.01)))
    model.add_frame(AttachedFrame('knee', femur, Transform.from_xyz_rpy(0.0, -0.4, 0.0, 0.0, 0.0, 0.7)))
    model.add_frame(AttachedFrame('world_marker', 'ground', Transform.from_xyz_rpy(2.0, 0.0, 0.0, np.pi, 0.0, 0.0)))
    model.finalize()
    return model


@pytest.fixture()
def state(model):
    return model.init_state()


@pytest.fixture()
def rot_z_90() -> Transform:
    return Transform(Vector3.zero(), Quaternion.from_axis_angle(Vector3.unit_z(), np.pi / 2))
