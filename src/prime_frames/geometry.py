import numpy    as np
import pybullet as pb

from dataclasses import dataclass

from .errors import DegenerateTransformError


# Datastructure representing a direction-like vector
class Vector3(tuple):
    def __new__(cls, x, y, z):
        return super(Vector3, cls).__new__(cls, (float(x), float(y), float(z)))

    def __add__(self, other):
        return type(self)(*(np.asarray(self) + other))
    
    def __sub__(self, other):
        return type(self)(*(np.asarray(self) - other))
    
    def __mul__(self, other):
        return type(self)(*(np.asarray(self) * other))

    def __truediv__(self, other):
        return type(self)(*(np.asarray(self) / other))

    def __neg__(self):
        return type(self)(*(-np.asarray(self)))

    def __str__(self):
        return self.__repr__()
    
    def __repr__(self):
        return f'Vector3{super().__repr__()}'

    def norm(self):
        return np.sqrt((np.asarray(self) ** 2).sum())

    def isclose(self, other, tol=1e-9):
        return bool(np.allclose(self, other, rtol=0.0, atol=tol))

    @classmethod
    def zero(cls):
        return cls(0, 0, 0)
    
    @classmethod
    def unit_x(cls):
        return cls(1, 0, 0)
    
    @classmethod
    def unit_y(cls):
        return cls(0, 1, 0)

    @classmethod
    def unit_z(cls):
        return cls(0, 0, 1)

# Datastructure representing a point
class Point3(Vector3):
    def __new__(cls, x, y, z):
        return super(Point3, cls).__new__(cls, x, y, z)

    def __str__(self):
        return self.__repr__()
    
    def __repr__(self):
        return f'Point3{tuple.__repr__(self)}'

# Datastructure representing a quaternion
class Quaternion(tuple):
    def __new__(cls, x, y, z, w):
        return super(Quaternion, cls).__new__(cls, (float(x), float(y), float(z), float(w)))

    def __str__(self):
        return self.__repr__()
    
    def __repr__(self):
        return f'Quaternion{super().__repr__()}'

    def norm(self):
        return np.sqrt((np.asarray(self) ** 2).sum())

    def normalized(self):
        n = self.norm()
        if n <= 1e-9:
            raise DegenerateTransformError(f'{self} does not describe a rotation.')
        # Keeps unit quaternions bit-identical
        if abs(n - 1.0) <= 1e-12:
            return self
        return Quaternion(*(np.asarray(self) / n))

    def matrix(self):
        return np.asarray(pb.getMatrixFromQuaternion(self)).reshape((3, 3))

    def isclose(self, other, tol=1e-9):
        # q and -q encode the same rotation
        return bool(np.allclose(self, other, rtol=0.0, atol=tol) or
                    np.allclose(self, -np.asarray(other), rtol=0.0, atol=tol))

    def numpy(self):
        return np.asarray(self)

    @staticmethod
    def from_euler(r, p, y):
        return Quaternion(*pb.getQuaternionFromEuler((r, p, y)))

    @staticmethod
    def from_axis_angle(axis : Vector3, angle : float):
        axis = Vector3(*axis)
        if axis.norm() <= 1e-4:
            return Quaternion.identity()

        axis /= axis.norm()
        axis *= np.sin(angle * 0.5)
        return Quaternion(*axis, np.cos(angle * 0.5))

    @staticmethod
    def identity():
        return Quaternion(0, 0, 0, 1)


# Datastructure representing a rigid pose as a Point3 and a Quaternion.
# Maps coordinates of a child frame into its reference frame: p_A = X_AF.dot(p_F)
@dataclass(frozen=True)
class Transform:
    position   : Point3
    quaternion : Quaternion

    def __post_init__(self):
        # Rotations are stored as unit quaternions, so every transform is invertible
        object.__setattr__(self, 'position', Point3(*self.position))
        object.__setattr__(self, 'quaternion', Quaternion(*self.quaternion).normalized())

    def __str__(self):
        return self.__repr__()
    
    def __repr__(self):
        return f'Transform({self.position}, {self.quaternion})'

    def dot(self, other):
        """Applies this transform to `other`.

        Transforms compose child-first: ``X_AB.dot(X_BC)`` yields ``X_AC``.
        A `Vector3` is only rotated, a `Point3` is rotated and translated.
        """
        if type(other) == Transform:
            new_pose = pb.multiplyTransforms(self.position, self.quaternion,
                                             other.position, other.quaternion)
            return Transform(Point3(*new_pose[0]), Quaternion(*new_pose[1]))
        elif type(other) == Vector3:
            return Vector3(*pb.multiplyTransforms((0, 0, 0), self.quaternion,
                                                  other, (0, 0, 0, 1))[0])
        elif type(other) == Point3:
            return Point3(*pb.multiplyTransforms(self.position, self.quaternion,
                                                 other, (0, 0, 0, 1))[0])
        elif type(other) == Quaternion:
            return Quaternion(*pb.multiplyTransforms((0, 0, 0), self.quaternion,
                                                     (0, 0, 0), other)[1])
        raise TypeError(f'Cannot transform type {type(other)}')
    
    def inv(self):
        temp = pb.invertTransform(self.position, self.quaternion)
        return Transform(Point3(*temp[0]), Quaternion(*temp[1]))

    def matrix(self):
        out = np.eye(4)
        out[:3, 3]  = self.position
        out[:3, :3] = self.quaternion.matrix()
        return out

    def isclose(self, other, tol=1e-9):
        return self.position.isclose(other.position, tol) and \
               self.quaternion.isclose(other.quaternion, tol)

    @staticmethod
    def from_xyz_rpy(x, y, z, rr, rp, ry):
        return Transform(Point3(x, y, z), Quaternion.from_euler(rr, rp, ry))

    @staticmethod
    def from_xyz(x, y, z):
        return Transform(Point3(x, y, z), Quaternion.identity())

    @staticmethod
    def from_axis_angle(axis, angle, position=(0, 0, 0)):
        return Transform(Point3(*position), Quaternion.from_axis_angle(axis, angle))

    @staticmethod
    def identity():
        return Transform(Point3(0, 0, 0), Quaternion.identity())
