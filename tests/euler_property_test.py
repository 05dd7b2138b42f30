"""Tests for EulerProperty - Euler angles <-> quaternion."""

import math

import numpy
import pytest
from scipy.spatial.transform import Rotation

from rotprop.properties import Config, EulerProperty, InvalidAxesError
from rotprop.properties.axes import AxesSpec
from rotprop.properties.euler_property import compose, decompose, format_angle
from rotprop.util import qis_approx


def assert_quat_approx(actual, expected, eps=1e-7):
    """Same rotation, sign of the quaternion ignored."""
    assert qis_approx(actual, expected, eps), f"{list(actual)} != {list(expected)}"


def degrees(prop: EulerProperty):
    return [p.get_float() for p in prop.angle_properties()]


def random_quats(n, seed=7):
    rng = numpy.random.default_rng(seed)
    qs = rng.normal(size=(n, 4))
    return [q / numpy.linalg.norm(q) for q in qs]


class Counter:
    def __init__(self):
        self.count = 0
        self.payloads = []

    def __call__(self, payload):
        self.count += 1
        self.payloads.append(payload)


SPECS = ["xyz", "sxyz", "zyx", "szyx", "rzxz", "sxyx", "yzx", "syxz", "rpy"]


class TestCompose:

    @pytest.mark.parametrize("text", ["xyz", "zyx", "zxz", "yxy"])
    def test_rotating_frame_matches_intrinsic(self, text):
        angles = [0.3, -0.7, 1.1]
        expected = Rotation.from_euler(text.upper(), angles).as_quat()
        assert_quat_approx(compose(angles, AxesSpec.parse(text)), expected, 1e-12)

    @pytest.mark.parametrize("text", ["xyz", "zyx", "zxz", "yxy"])
    def test_fixed_frame_matches_extrinsic(self, text):
        angles = [0.3, -0.7, 1.1]
        expected = Rotation.from_euler(text, angles).as_quat()
        assert_quat_approx(compose(angles, AxesSpec.parse("s" + text)), expected, 1e-12)

    def test_fixed_frame_is_reversed_rotating_frame(self):
        q_fixed = compose([0.1, 0.2, 0.3], AxesSpec.parse("sxyz"))
        q_rot = compose([0.3, 0.2, 0.1], AxesSpec.parse("rzyx"))
        assert_quat_approx(q_fixed, q_rot, 1e-12)

    def test_single_axis(self):
        q = compose([math.pi / 2, 0.0, 0.0], AxesSpec.parse("xyz"))
        s = math.sin(math.pi / 4)
        assert numpy.allclose(q, [s, 0.0, 0.0, s])


class TestDecompose:

    @pytest.mark.parametrize("text", SPECS)
    def test_decompose_inverts_compose(self, text):
        spec = AxesSpec.parse(text)
        for q in random_quats(20):
            assert_quat_approx(compose(decompose(q, spec), spec), q)

    def test_fixed_frame_angles_follow_axis_order(self):
        q = compose([0.1, 0.2, 0.3], AxesSpec.parse("sxyz"))
        assert numpy.allclose(decompose(q, AxesSpec.parse("sxyz")), [0.1, 0.2, 0.3])
        assert numpy.allclose(decompose(q, AxesSpec.parse("rzyx")), [0.3, 0.2, 0.1])

    def test_gimbal_lock_is_not_an_error(self):
        spec = AxesSpec.parse("xyz")
        q = compose([0.3, math.pi / 2, 0.2], spec)
        angles = decompose(q, spec)
        assert angles[1] == pytest.approx(math.pi / 2)
        assert_quat_approx(compose(angles, spec), q, 1e-6)


class TestFormatAngle:

    @pytest.mark.parametrize("value,text", [
        (0.0, "0"),
        (45.0, "45"),
        (12.34, "12.3"),
        (-0.01, "0"),
        (179.96, "180"),
        (-90.0, "-90"),
        (89.99999999, "90"),
    ])
    def test_format(self, value, text):
        assert format_angle(value) == text


class TestEulerPropertyBasics:

    def test_defaults(self):
        p = EulerProperty()
        assert p.get_axes() == "rpy"
        assert [c.name for c in p.angle_properties()] == ["roll", "pitch", "yaw"]
        assert p.get_value() == "rpy: 0; 0; 0"
        assert numpy.allclose(p.get_quaternion(), [0, 0, 0, 1])
        assert p.child_count() == 3

    def test_identity_static_xyz(self):
        p = EulerProperty()
        p.set_axes("sxyz")
        assert numpy.allclose(p.get_euler_angles(), [0.0, 0.0, 0.0])
        assert p.get_value() == "sxyz: 0; 0; 0"

    def test_axis_names_follow_axes(self):
        p = EulerProperty(axes="zxz")
        assert [c.name for c in p.angle_properties()] == ["z", "x", "z"]

    def test_initial_value_is_decomposed(self):
        s = math.sin(math.pi / 4)
        p = EulerProperty(value=[0.0, 0.0, s, s], axes="xyz")
        assert degrees(p) == pytest.approx([0.0, 0.0, 90.0])
        assert p.get_value() == "xyz: 0; 0; 90"

    def test_normalized_90_about_x(self):
        p = EulerProperty()
        p.set_axes("xyz")
        p.set_euler_angles(math.radians(90), 0.0, 0.0, normalize=True)

        s = math.sin(math.pi / 4)
        assert_quat_approx(p.get_quaternion(), [s, 0.0, 0.0, s], 1e-12)
        assert degrees(p) == pytest.approx([90.0, 0.0, 0.0], abs=1e-9)
        assert p.get_value() == "xyz: 90; 0; 0"

    def test_decomposition_is_read_only_copy(self):
        p = EulerProperty()
        q = p.get_quaternion()
        q[0] = 5.0
        assert numpy.allclose(p.get_quaternion(), [0, 0, 0, 1])


class TestEulerPropertyRoundTrip:

    @pytest.mark.parametrize("text", SPECS)
    def test_quaternion_survives_angles(self, text):
        for q in random_quats(10, seed=11):
            p = EulerProperty(axes=text)
            p.set_quaternion(q)
            assert_quat_approx(p.get_quaternion(), q, 1e-12)

            angles = p.get_euler_angles()
            other = EulerProperty(axes=text)
            other.set_euler_angles(*angles, normalize=True)
            assert_quat_approx(other.get_quaternion(), q)

    def test_static_and_rotating_angles_are_reversed(self):
        q = random_quats(1, seed=3)[0]
        fixed = EulerProperty(value=q, axes="sxyz")
        rotating = EulerProperty(value=q, axes="rzyx")
        assert fixed.get_euler_angles() == pytest.approx(rotating.get_euler_angles()[::-1])


class TestEulerPropertyEditing:

    def test_unnormalized_angles_are_kept_verbatim(self):
        p = EulerProperty(axes="xyz")
        p.set_euler_angles(math.radians(370), math.radians(10), math.radians(-400))
        assert degrees(p) == pytest.approx([370.0, 10.0, -400.0])
        assert p.get_value() == "xyz: 370; 10; -400"

    def test_normalized_angles_are_canonical(self):
        p = EulerProperty(axes="xyz")
        p.set_euler_angles(math.radians(370), 0.0, 0.0, normalize=True)
        assert degrees(p) == pytest.approx([10.0, 0.0, 0.0])

    def test_child_edit_leaves_other_angles_untouched(self):
        p = EulerProperty(axes="xyz")
        p.set_euler_angles(math.radians(10), math.radians(20), math.radians(30))
        before = degrees(p)

        p.angle_properties()[1].set_value(45.0)

        after = degrees(p)
        assert after[0] == before[0]
        assert after[1] == 45.0
        assert after[2] == before[2]
        expected = compose([math.radians(a) for a in after], AxesSpec.parse("xyz"))
        assert_quat_approx(p.get_quaternion(), expected, 1e-12)
        assert p.get_value() == "xyz: 10; 45; 30"

    def test_child_edit_notifies(self):
        p = EulerProperty(axes="xyz")
        about, changed, quat = Counter(), Counter(), Counter()
        p.about_to_change += about
        p.changed += changed
        p.quaternion_changed += quat

        p.angle_properties()[0].set_value(30.0)

        assert about.count >= 1
        assert changed.count == 1
        assert quat.count == 1
        assert_quat_approx(quat.payloads[0], p.get_quaternion(), 1e-12)

    def test_set_quaternion_same_rotation_is_noop(self):
        p = EulerProperty(value=random_quats(1)[0])
        changed, quat = Counter(), Counter()
        p.changed += changed
        p.quaternion_changed += quat

        p.set_quaternion(p.get_quaternion() + 1e-12)
        p.set_quaternion(-p.get_quaternion())

        assert changed.count == 0
        assert quat.count == 0

    def test_set_quaternion_notifies(self):
        p = EulerProperty()
        changed, quat = Counter(), Counter()
        p.changed += changed
        p.quaternion_changed += quat

        q = random_quats(1)[0]
        p.set_quaternion(q)

        assert changed.count == 1
        assert quat.count == 1
        assert_quat_approx(quat.payloads[0], q, 1e-12)

    def test_set_quaternion_normalizes(self):
        p = EulerProperty()
        p.set_quaternion([0.0, 0.0, 0.0, 3.0])
        assert numpy.allclose(p.get_quaternion(), [0, 0, 0, 1])

    def test_zero_quaternion_raises(self):
        p = EulerProperty()
        with pytest.raises(ValueError):
            p.set_quaternion([0.0, 0.0, 0.0, 0.0])


class TestEulerPropertyAxes:

    def test_axes_change_keeps_quaternion(self):
        p = EulerProperty(axes="xyz")
        p.set_euler_angles(math.radians(90), 0.0, 0.0, normalize=True)
        q = p.get_quaternion()

        p.set_axes("zyx")

        assert numpy.allclose(p.get_quaternion(), q)
        assert degrees(p) == pytest.approx([0.0, 0.0, 90.0], abs=1e-9)
        assert [c.name for c in p.angle_properties()] == ["z", "y", "x"]
        assert p.get_value() == "zyx: 0; 0; 90"

    def test_same_axes_is_noop(self):
        p = EulerProperty(axes="xyz")
        changed = Counter()
        p.changed += changed
        p.set_axes("xyz")
        assert changed.count == 0

    def test_invalid_axes_keep_previous(self):
        p = EulerProperty(axes="xyz")
        p.set_euler_angles(0.1, 0.2, 0.3)
        value = p.get_value()

        with pytest.raises(InvalidAxesError):
            p.set_axes("xxz")

        assert p.get_axes() == "xyz"
        assert p.get_axes_spec() == AxesSpec.parse("xyz")
        assert p.get_value() == value

    def test_rpy_display(self):
        p = EulerProperty()
        p.set_euler_angles(0.0, 0.0, math.radians(30))
        assert p.get_value() == "rpy: 0; 0; 30"
        assert p.get_axes_spec() == AxesSpec.parse("sxyz")


class TestEulerPropertyStringValue:

    def test_axes_and_angles(self):
        p = EulerProperty()
        assert p.set_value("xyz: 10; 20; 30")
        assert p.get_axes() == "xyz"
        assert p.get_value() == "xyz: 10; 20; 30"
        assert degrees(p) == pytest.approx([10.0, 20.0, 30.0])

    def test_axes_and_angles_notify_once(self):
        p = EulerProperty(axes="xyz")
        p.set_euler_angles(math.radians(90), 0.0, 0.0, normalize=True)
        about, values, quat = Counter(), [], Counter()
        p.about_to_change += about
        p.changed += lambda prop: values.append(prop.get_value())
        p.quaternion_changed += quat

        assert p.set_value("zyx: 10; 20; 30")

        assert about.count == 1
        assert values == ["zyx: 10; 20; 30"]
        assert quat.count == 1
        assert [c.name for c in p.angle_properties()] == ["z", "y", "x"]

    def test_axes_only_notifies_once(self):
        p = EulerProperty(axes="xyz")
        p.set_euler_angles(math.radians(90), 0.0, 0.0, normalize=True)
        values = []
        p.changed += lambda prop: values.append(prop.get_value())

        assert p.set_value("zyx")

        assert values == ["zyx: 0; 0; 90"]

    def test_angles_only(self):
        p = EulerProperty(axes="zyx")
        assert p.set_value(" 1.5; -2 ;3")
        assert p.get_axes() == "zyx"
        assert p.get_value() == "zyx: 1.5; -2; 3"

    def test_axes_only(self):
        p = EulerProperty()
        assert p.set_value("szxz")
        assert p.get_axes() == "szxz"

    @pytest.mark.parametrize("text", [
        "",
        "xxz: 1; 2; 3",
        "xyz: 1; 2",
        "xyz: a; b; c",
        "bogus",
        "10; 20",
    ])
    def test_rejected_input_changes_nothing(self, text):
        p = EulerProperty(axes="zyx")
        p.set_euler_angles(0.1, 0.2, 0.3)
        value, q = p.get_value(), p.get_quaternion()
        changed = Counter()
        p.changed += changed

        assert not p.set_value(text)

        assert p.get_value() == value
        assert p.get_axes() == "zyx"
        assert numpy.array_equal(p.get_quaternion(), q)
        assert changed.count == 0


class TestEulerPropertyPersistence:

    def test_save_writes_axes_and_degrees(self):
        p = EulerProperty(axes="xyz")
        p.set_euler_angles(math.radians(10), math.radians(20), math.radians(30))
        cfg = Config()
        p.save(cfg)
        assert sorted(cfg.keys()) == ["axes", "e1", "e2", "e3"]
        assert cfg.map_get_string("axes") == "xyz"
        assert cfg.map_get_float("e2") == pytest.approx(20.0)

    def test_save_load_round_trip(self):
        p = EulerProperty(axes="szxz")
        p.set_euler_angles(math.radians(30), math.radians(40), math.radians(50), normalize=True)
        cfg = Config.from_json(_save(p).to_json())

        restored = EulerProperty()
        restored.load(cfg)

        assert restored.get_axes() == "szxz"
        assert_quat_approx(restored.get_quaternion(), p.get_quaternion())

    def test_load_notifies_once(self):
        values = []
        p = EulerProperty()
        p.changed += lambda prop: values.append(prop.get_value())

        p.load(Config({"axes": "xyz", "e1": 90.0, "e2": 0.0, "e3": 0.0}))

        assert values == ["xyz: 90; 0; 0"]

    def test_incomplete_config_is_ignored(self):
        p = EulerProperty()
        p.load(Config({"axes": "xyz", "e1": 1.0}))
        assert p.get_axes() == "rpy"
        assert numpy.allclose(p.get_quaternion(), [0, 0, 0, 1])

    def test_invalid_stored_axes_are_ignored(self):
        p = EulerProperty()
        p.load(Config({"axes": "xxz", "e1": 1.0, "e2": 2.0, "e3": 3.0}))
        assert p.get_axes() == "rpy"
        assert p.get_value() == "rpy: 0; 0; 0"

    def test_read_only_reaches_children(self):
        p = EulerProperty()
        p.set_read_only(True)
        assert p.is_read_only()
        assert all(c.is_read_only() for c in p.angle_properties())


def _save(p: EulerProperty) -> Config:
    cfg = Config()
    p.save(cfg)
    return cfg
