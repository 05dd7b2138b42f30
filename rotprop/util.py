import math
import numpy

QUAT_EPS = 1e-9


def identity_quat() -> numpy.ndarray:
    return numpy.array([0.0, 0.0, 0.0, 1.0])


def as_quat(q) -> numpy.ndarray:
    """Coerce a sequence to a float quaternion array [x, y, z, w]."""
    arr = numpy.asarray(q, dtype=float).reshape(-1)
    if arr.shape != (4,):
        raise ValueError(f"quaternion needs 4 components, got {arr.size}")
    return arr.copy()


def qnormalize(q) -> numpy.ndarray:
    """Return a unit-length copy of q. Raises ValueError for a zero quaternion."""
    arr = as_quat(q)
    norm = numpy.linalg.norm(arr)
    if norm < QUAT_EPS or not numpy.isfinite(norm):
        raise ValueError(f"cannot normalize quaternion {arr.tolist()}")
    return arr / norm


def qmul(q1: numpy.ndarray, q2: numpy.ndarray) -> numpy.ndarray:
    """Multiply two quaternions."""
    x1, y1, z1, w1 = q1
    x2, y2, z2, w2 = q2
    return numpy.array([
        w1*x2 + x1*w2 + y1*z2 - z1*y2,
        w1*y2 - x1*z2 + y1*w2 + z1*x2,
        w1*z2 + x1*y2 - y1*x2 + z1*w2,
        w1*w2 - x1*x2 - y1*y2 - z1*z2
    ])


def axis_quat(axis: int, angle: float) -> numpy.ndarray:
    """Elemental rotation by `angle` radians about axis 0=x, 1=y, 2=z."""
    q = numpy.zeros(4)
    q[3] = math.cos(angle / 2)
    q[axis] = math.sin(angle / 2)
    return q


def qis_approx(q1, q2, eps: float = QUAT_EPS) -> bool:
    """
    True if q1 and q2 describe the same rotation within eps.

    Both are normalized first; q and -q are the same rotation.
    """
    a = qnormalize(q1)
    b = qnormalize(q2)
    return bool(
        numpy.max(numpy.abs(a - b)) <= eps
        or numpy.max(numpy.abs(a + b)) <= eps
    )