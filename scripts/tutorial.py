#!/usr/bin/env python
import sys
import numpy as np

from prime_frames import Model,         \
                         GroundedFrame, \
                         AttachedFrame, \
                         Transform,     \
                         Point3,        \
                         Vector3


class DemoIntro(object):
    def run(self):
        model  = Model()
        body   = model.add_frame(AttachedFrame('body', model.ground, Transform.from_axis_angle(Vector3.unit_z(), np.pi * 0.5)))
        offset = model.add_frame(AttachedFrame('offset', body, Transform.from_xyz(1, 0, 0)))
        model.finalize()

        state = model.init_state()
        print(f'Point (1, 0, 0) of "offset" in ground: {offset.find_location_in_another_frame(state, Point3(1, 0, 0), model.ground)}')
        print(f'Base frame of "offset": {offset.find_base_frame()}')
        print(f'Transform of "offset" in its base: {offset.find_transform_in_base_frame()}')


class DemoState(object):
    def run(self):
        model  = Model()
        femur  = model.add_frame(GroundedFrame('femur', Transform.from_xyz(0, 0, 1)))
        knee   = model.add_frame(AttachedFrame('knee', femur, Transform.from_xyz(0, 0, -0.4)))
        model.finalize()

        state = model.init_state()
        for t in np.linspace(0, 1, 5):
            state.set_body_pose('femur', Transform.from_xyz_rpy(0, 0, 1, t, 0, 0))
            print(f'Stamp {state.stamp:>3}: knee at {knee.get_position_in_ground(state)}, '
                  f'x-axis of knee in femur: {knee.express_vector_in_another_frame(state, Vector3.unit_x(), femur)}')


DEMOS = {'intro': DemoIntro,
         'state': DemoState}

if __name__ == '__main__':
    if len(sys.argv) < 2:
        print('Name of demo to run required. Options are:\n  {}'.format('\n  '.join(DEMOS.keys())))
    else:
        demo = sys.argv[1]
        if demo not in DEMOS:
            print('Unknown demo {}. Options are:\n  {}'.format(demo, '\n  '.join(DEMOS.keys())))
        else:
            DEMOS[demo]().run()
