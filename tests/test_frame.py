"""Tests for the spatial and ancestry queries of frames."""

import itertools

import numpy as np
import pytest

from prime_frames import AttachedFrame,     \
                         GroundedFrame,     \
                         InvalidStateError, \
                         Model,             \
                         Point3,            \
                         Quaternion,        \
                         Transform,         \
                         Vector3

TOL = 1e-6


def test_transform_to_self_is_identity(model, state):
    for f in model:
        assert f.find_transform_between(state, f).isclose(Transform.identity(), TOL)


def test_transform_between_is_inverse_of_reverse(model, state):
    for f, a in itertools.permutations(model, 2):
        X_AF = f.find_transform_between(state, a)
        X_FA = a.find_transform_between(state, f)
        assert X_AF.isclose(X_FA.inv(), TOL), f'{f} -> {a}'


def test_transform_between_composes(model, state):
    for f, a, b in itertools.permutations(model, 3):
        X_AF = f.find_transform_between(state, a)
        X_BA = a.find_transform_between(state, b)
        X_BF = f.find_transform_between(state, b)
        assert X_BA.dot(X_AF).isclose(X_BF, TOL), f'{f} -> {a} -> {b}'


def test_transform_to_ground_is_ground_transform(model, state):
    for f in model:
        assert f.find_transform_between(state, model.ground).isclose(f.get_ground_transform(state), TOL)


def test_attached_ground_transform(model, state):
    pelvis = model.get_frame('pelvis')
    hip    = model.get_frame('hip')

    expected = pelvis.get_ground_transform(state).dot(hip.offset)
    assert hip.get_ground_transform(state).isclose(expected, TOL)


def test_grounded_frame_reads_state(model, state):
    femur = model.get_frame('femur')
    assert femur.get_ground_transform(state) == femur.initial_pose

    pose = Transform.from_xyz_rpy(3, 2, 1, 0.0, 0.5, 0.0)
    state.set_body_pose('femur', pose)
    assert femur.get_ground_transform(state) == pose


def test_ground_is_identity(model, state):
    assert model.ground.get_ground_transform(state) == Transform.identity()
    assert model.ground.find_base_frame() is model.ground


def test_express_vector_ignores_translation(model, state):
    hip  = model.get_frame('hip')
    knee = model.get_frame('knee')
    vec  = Vector3(0.3, -1.2, 0.5)

    X_AF     = hip.find_transform_between(state, knee)
    expected = X_AF.quaternion.matrix().dot(vec)
    np.testing.assert_allclose(hip.express_vector_in_another_frame(state, vec, knee), expected, atol=TOL)

    # Moving the femur without rotating it does not change the result
    femur = model.get_frame('femur')
    pose  = femur.get_ground_transform(state)
    state.set_body_pose('femur', Transform(pose.position + Vector3(5, -3, 2), pose.quaternion))
    np.testing.assert_allclose(hip.express_vector_in_another_frame(state, vec, knee), expected, atol=TOL)

    # While the location of a point does change
    assert not hip.find_location_in_another_frame(state, vec, knee).isclose(X_AF.dot(Point3(*vec)), TOL)


def test_find_location_is_homogeneous(model, state):
    marker = model.get_frame('marker')
    knee   = model.get_frame('knee')
    point  = Point3(0.1, 0.2, 0.3)

    expected = marker.find_transform_between(state, knee).matrix().dot([*point, 1.0])[:3]
    np.testing.assert_allclose(marker.find_location_in_another_frame(state, point, knee), expected, atol=TOL)


def test_ground_queries(model, state):
    marker = model.get_frame('marker')
    X_GF   = marker.get_ground_transform(state)

    np.testing.assert_allclose(marker.find_location_in_ground(state, (1, 0, 0)),
                               marker.find_location_in_another_frame(state, (1, 0, 0), model.ground), atol=TOL)
    np.testing.assert_allclose(marker.express_vector_in_ground(state, (0, 1, 0)),
                               X_GF.quaternion.matrix()[:, 1], atol=TOL)
    assert marker.get_position_in_ground(state) == X_GF.position
    assert marker.get_rotation_in_ground(state) == X_GF.quaternion


def test_base_frames(model):
    pelvis = model.get_frame('pelvis')
    femur  = model.get_frame('femur')

    assert pelvis.find_base_frame() is pelvis
    assert model.get_frame('hip').find_base_frame() is pelvis
    assert model.get_frame('marker').find_base_frame() is pelvis
    assert model.get_frame('knee').find_base_frame() is femur
    assert model.get_frame('world_marker').find_base_frame() is model.ground


def test_base_frame_is_idempotent(model):
    for f in model:
        base = f.find_base_frame()
        assert base.find_base_frame() is base


def test_transform_in_base_frame(model, state):
    pelvis = model.get_frame('pelvis')
    hip    = model.get_frame('hip')
    marker = model.get_frame('marker')

    assert pelvis.find_transform_in_base_frame() == Transform.identity()
    assert hip.find_transform_in_base_frame().isclose(hip.offset, TOL)
    assert marker.find_transform_in_base_frame().isclose(hip.offset.dot(marker.offset), TOL)

    # X_BF agrees with the state dependent transform between frame and base
    for f in model:
        X_BF = f.find_transform_between(state, f.find_base_frame())
        assert f.find_transform_in_base_frame().isclose(X_BF, TOL), str(f)


def test_offset_chain_scenario(rot_z_90):
    model  = Model()
    body   = model.add_frame(AttachedFrame('body', model.ground, rot_z_90))
    offset = model.add_frame(AttachedFrame('offset', body, Transform.from_xyz(1, 0, 0)))
    model.finalize()
    state  = model.init_state()

    first = offset.find_location_in_another_frame(state, Point3(1, 0, 0), model.ground)
    np.testing.assert_allclose(first, (0, 2, 0), atol=TOL)

    expected = model.ground.get_ground_transform(state).dot(rot_z_90.dot(Transform.from_xyz(1, 0, 0).dot(Point3(1, 0, 0))))
    np.testing.assert_allclose(first, expected, atol=TOL)

    for _ in range(3):
        assert offset.find_location_in_another_frame(state, Point3(1, 0, 0), model.ground) == first


def test_state_of_other_model_is_rejected(model):
    other = Model()
    other.add_frame(GroundedFrame('pelvis'))
    other.finalize()
    foreign = other.init_state()

    with pytest.raises(InvalidStateError):
        model.get_frame('hip').get_ground_transform(foreign)

    with pytest.raises(InvalidStateError):
        model.get_frame('hip').find_transform_between(model.init_state(), other.get_frame('pelvis'))


def test_unknown_body_in_state(model, state):
    with pytest.raises(InvalidStateError):
        state.get_body_pose('tibia')

    with pytest.raises(InvalidStateError):
        state.set_body_pose('tibia', Transform.identity())


def test_rounded_rotation_works_in_both_directions():
    rounded = Transform(Point3(0, 0, 0), Quaternion(0, 0, 0.7071, 0.7071))

    model = Model()
    body  = model.add_frame(GroundedFrame('body', rounded))
    model.finalize()
    state = model.init_state()

    np.testing.assert_allclose(body.find_location_in_another_frame(state, (1, 0, 0), model.ground), (0, 1, 0), atol=TOL)
    np.testing.assert_allclose(model.ground.find_location_in_another_frame(state, (1, 0, 0), body), (0, -1, 0), atol=TOL)
    assert body.find_transform_between(state, model.ground).isclose(
                model.ground.find_transform_between(state, body).inv(), TOL)

    state.set_body_pose('body', Transform(Point3(1, 0, 0), Quaternion(0.7071, 0, 0, 0.7071)))
    np.testing.assert_allclose(model.ground.find_location_in_another_frame(state, (1, 0, 1), body), (0, 1, 0), atol=TOL)
