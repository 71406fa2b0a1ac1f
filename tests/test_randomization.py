"""Tests for the randomization strategies."""

import logging

import numpy as np
import pytest

from lattice_rqmc import (
    DigitalNet,
    IdentityRandomization,
    InvalidArgumentError,
    KorobovLattice,
    KorobovLatticeSequence,
    LeftMatrixScrambleShift,
    PointSetRandomization,
    StripedScrambleShift,
    UniformShift,
)


def make_lattice():
    return KorobovLattice(n=64, multiplier=19, dim=3)


def make_net():
    return DigitalNet.van_der_corput(3, 3, dim=2)


class TestStrategyContract:
    """Accessors shared by all strategies."""

    @pytest.mark.parametrize(
        "cls", [IdentityRandomization, UniformShift, StripedScrambleShift, LeftMatrixScrambleShift]
    )
    def test_source_accessors(self, cls):
        first = np.random.default_rng(1)
        second = np.random.default_rng(2)
        rand = cls(first)
        assert isinstance(rand, PointSetRandomization)
        assert rand.get_source() is first
        rand.set_source(second)
        assert rand.get_source() is second
        rand.set_source(None)
        assert rand.get_source() is None

    def test_default_source_is_none(self):
        assert UniformShift().get_source() is None

    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            PointSetRandomization()

    def test_labels(self):
        assert str(StripedScrambleShift()) == "striped matrix scramble + random digital shift"
        assert StripedScrambleShift.label == "striped matrix scramble + random digital shift"
        assert str(LeftMatrixScrambleShift()) == "left matrix scramble + random digital shift"
        assert str(UniformShift()) == "random shift"

    def test_point_set_randomize_delegates(self):
        lattice = make_lattice()
        lattice.randomize(UniformShift(np.random.default_rng(0)))
        assert lattice.random_shift is not None


class TestIdentityRandomization:
    """Tests for IdentityRandomization."""

    @pytest.mark.parametrize("factory", [make_lattice, make_net])
    def test_no_mutation(self, factory):
        point_set = factory()
        before = point_set.points()
        IdentityRandomization(np.random.default_rng(0)).randomize(point_set)
        assert point_set.points().tobytes() == before.tobytes()

    def test_source_untouched(self):
        source = np.random.default_rng(0)
        state = source.bit_generator.state
        IdentityRandomization(source).randomize(make_lattice())
        assert source.bit_generator.state == state

    def test_works_without_source(self):
        point_set = make_net()
        IdentityRandomization().randomize(point_set)
        assert point_set.random_shift is None


class TestUniformShift:
    """Tests for UniformShift."""

    def test_shift_applied_to_all_points(self):
        lattice = make_lattice()
        plain = lattice.points()
        UniformShift(np.random.default_rng(3)).randomize(lattice)
        expected = plain + np.random.default_rng(3).random(3)
        expected[expected >= 1.0] -= 1.0
        np.testing.assert_array_equal(lattice.points(), expected)

    def test_draws_dim_variates(self):
        source = np.random.default_rng(3)
        reference = np.random.default_rng(3)
        UniformShift(source).randomize(make_lattice())
        reference.random(3)
        assert source.random() == reference.random()

    def test_reapplication_replaces(self):
        lattice = make_lattice()
        UniformShift(np.random.default_rng(1)).randomize(lattice)
        UniformShift(np.random.default_rng(2)).randomize(lattice)

        fresh = make_lattice()
        UniformShift(np.random.default_rng(2)).randomize(fresh)
        np.testing.assert_array_equal(lattice.points(), fresh.points())

    def test_reapplication_with_replaced_source(self):
        lattice = make_lattice()
        rand = UniformShift(np.random.default_rng(1))
        rand.randomize(lattice)
        rand.set_source(np.random.default_rng(2))
        rand.randomize(lattice)
        np.testing.assert_array_equal(lattice.random_shift, np.random.default_rng(2).random(3))

    def test_lattice_sequence(self):
        seq = KorobovLatticeSequence(2, 3, dim=4)
        plain = seq.points(16)
        UniformShift(np.random.default_rng(9)).randomize(seq)
        assert seq.random_shift.shape == (4,)
        assert not np.array_equal(seq.points(16), plain)

    def test_missing_source(self):
        lattice = make_lattice()
        before = lattice.points()
        with pytest.raises(InvalidArgumentError, match="UniformShift.randomize"):
            UniformShift().randomize(lattice)
        assert lattice.points().tobytes() == before.tobytes()


class TestStripedScrambleShift:
    """Tests for StripedScrambleShift."""

    def test_scramble_then_shift(self):
        net = make_net()
        StripedScrambleShift(np.random.default_rng(5)).randomize(net)

        manual = make_net()
        source = np.random.default_rng(5)
        manual.striped_matrix_scramble(source)
        manual.add_random_digital_shift(source)
        np.testing.assert_array_equal(net.generating_matrices, manual.generating_matrices)
        np.testing.assert_array_equal(net.digital_shift, manual.digital_shift)
        np.testing.assert_array_equal(net.points(), manual.points())

    def test_requires_digital_net(self):
        lattice = make_lattice()
        lattice.add_random_shift(np.random.default_rng(0))
        before = lattice.points()
        source = np.random.default_rng(5)
        state = source.bit_generator.state

        with pytest.raises(InvalidArgumentError) as excinfo:
            StripedScrambleShift(source).randomize(lattice)
        message = str(excinfo.value)
        assert "StripedScrambleShift.randomize" in message
        assert "MatrixScrambler" in message

        assert lattice.points().tobytes() == before.tobytes()
        assert source.bit_generator.state == state

    def test_rejects_lattice_sequence(self):
        with pytest.raises(InvalidArgumentError, match="KorobovLatticeSequence"):
            StripedScrambleShift(np.random.default_rng(0)).randomize(KorobovLatticeSequence(2, 3))

    def test_rejects_non_point_set(self):
        with pytest.raises(InvalidArgumentError, match="MatrixScrambler"):
            StripedScrambleShift(np.random.default_rng(0)).randomize([[0.5, 0.5]])

    def test_missing_source_leaves_net_unchanged(self):
        net = make_net()
        before = net.points()
        with pytest.raises(InvalidArgumentError, match="no random source"):
            StripedScrambleShift().randomize(net)
        assert not net.is_scrambled
        assert net.points().tobytes() == before.tobytes()

    def test_reapplication_replaces(self):
        net = make_net()
        StripedScrambleShift(np.random.default_rng(1)).randomize(net)
        StripedScrambleShift(np.random.default_rng(2)).randomize(net)

        fresh = make_net()
        StripedScrambleShift(np.random.default_rng(2)).randomize(fresh)
        np.testing.assert_array_equal(net.points(), fresh.points())

    def test_logs_label(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="lattice_rqmc"):
            StripedScrambleShift(np.random.default_rng(1)).randomize(make_net())
        assert "striped matrix scramble + random digital shift" in caplog.text


class TestLeftMatrixScrambleShift:
    """Tests for LeftMatrixScrambleShift."""

    def test_scramble_then_shift(self):
        net = make_net()
        LeftMatrixScrambleShift(np.random.default_rng(5)).randomize(net)

        manual = make_net()
        source = np.random.default_rng(5)
        manual.left_matrix_scramble(source)
        manual.add_random_digital_shift(source)
        np.testing.assert_array_equal(net.points(), manual.points())

    def test_requires_digital_net(self):
        with pytest.raises(InvalidArgumentError, match="LeftMatrixScrambleShift.randomize"):
            LeftMatrixScrambleShift(np.random.default_rng(0)).randomize(make_lattice())


class TestComposition:
    """Strategies of different types compose; same type replaces."""

    def test_uniform_shift_then_striped_scramble(self):
        net = make_net()
        UniformShift(np.random.default_rng(1)).randomize(net)
        shift = net.random_shift
        StripedScrambleShift(np.random.default_rng(2)).randomize(net)

        np.testing.assert_array_equal(net.random_shift, shift)
        assert net.digital_shift is not None

        scrambled_only = make_net()
        StripedScrambleShift(np.random.default_rng(2)).randomize(scrambled_only)
        expected = scrambled_only.points() + shift
        expected[expected >= 1.0] -= 1.0
        np.testing.assert_array_equal(net.points(), expected)

    def test_order_of_different_types_is_irrelevant(self):
        first = make_net()
        UniformShift(np.random.default_rng(1)).randomize(first)
        StripedScrambleShift(np.random.default_rng(2)).randomize(first)

        second = make_net()
        StripedScrambleShift(np.random.default_rng(2)).randomize(second)
        UniformShift(np.random.default_rng(1)).randomize(second)
        np.testing.assert_array_equal(first.points(), second.points())

    def test_same_type_twice_keeps_only_last(self):
        net = make_net()
        UniformShift(np.random.default_rng(1)).randomize(net)
        StripedScrambleShift(np.random.default_rng(2)).randomize(net)
        UniformShift(np.random.default_rng(3)).randomize(net)

        expected = make_net()
        StripedScrambleShift(np.random.default_rng(2)).randomize(expected)
        UniformShift(np.random.default_rng(3)).randomize(expected)
        np.testing.assert_array_equal(net.points(), expected.points())

    def test_scramble_strategies_replace_each_other(self):
        net = make_net()
        LeftMatrixScrambleShift(np.random.default_rng(1)).randomize(net)
        StripedScrambleShift(np.random.default_rng(2)).randomize(net)

        expected = make_net()
        StripedScrambleShift(np.random.default_rng(2)).randomize(expected)
        np.testing.assert_array_equal(net.points(), expected.points())

    def test_unrandomize_after_composition(self):
        net = make_net()
        plain = net.points()
        UniformShift(np.random.default_rng(1)).randomize(net)
        StripedScrambleShift(np.random.default_rng(2)).randomize(net)
        net.unrandomize()
        np.testing.assert_array_equal(net.points(), plain)
