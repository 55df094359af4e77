import numpy as np
import pytest

from ClearThresh.ImageProcessing.Thresholding import (threshold, apply_threshold, resolve_configuration,
                                                      ThresholdConfiguration)
from ClearThresh.Utils.exceptions import ConfigError, ThresholdTypeError


@pytest.fixture
def ramp():
    return np.arange(-5, 6, dtype=float)


@pytest.fixture
def grid():
    xx, yy = np.meshgrid(np.linspace(-5, 5, 41), np.linspace(-2, 2, 17), indexing='ij')
    return xx * (1 + 0.1 * yy)


# Columns of the reference table, input -5 .. 5
@pytest.mark.parametrize("arguments, expected", [
    ((0,), [0, 0, 0, 0, 0, 0, 1, 2, 3, 4, 5]),
    ((-3, 4), [-3, -3, -3, -2, -1, 0, 1, 2, 3, 4, 4]),
    ((2, 'abs'), [-5, -4, -3, -2, -2, 2, 2, 2, 3, 4, 5]),
    ((2, 4, 'abs'), [-4, -4, -3, -2, -2, 2, 2, 2, 3, 4, 4]),
    ((2, 'max'), [-5, -4, -3, -2, -1, 0, 1, 2, 2, 2, 2]),
])
def test_reference_table(ramp, arguments, expected):
    np.testing.assert_array_equal(threshold(ramp, *arguments), expected)


@pytest.mark.parametrize("data, arguments, expected", [
    (-5, (1,), 1),
    (-5, (1, 'max'), -5),
    (5, (1, 'max'), 1),
    ([-5, -1, 0, 1, 5], (1, 'abs'), [-5, -1, 1, 1, 5]),
    ([-5, -1, 0, 1, 5], (1, 'max', 'abs'), [-1, -1, 0, 1, 1]),
    ([-3, 0, 3], (1, 2), [1, 1, 2]),
    ([-5, -1, 0, 1, 5], (1, 2, 'abs'), [-2, -1, 1, 1, 2]),
])
def test_documented_examples(data, arguments, expected):
    result = threshold(data, *arguments)
    assert result.shape == np.shape(data)
    np.testing.assert_array_equal(result, expected)


def test_floor_and_ceiling(grid):
    np.testing.assert_array_equal(threshold(grid, 0.7), np.maximum(grid, 0.7))
    np.testing.assert_array_equal(threshold(grid, 0.7, 'max'), np.minimum(grid, 0.7))
    np.testing.assert_array_equal(threshold(grid, 0.7, maximum=True), np.minimum(grid, 0.7))


def test_clamp_ignores_order_and_maximum(grid):
    expected = np.clip(grid, -1.5, 2.5)
    np.testing.assert_array_equal(threshold(grid, 2.5, -1.5), expected)
    np.testing.assert_array_equal(threshold(grid, -1.5, 2.5, 'max'), expected)


def test_absolute_floor(grid):
    t = -1.5  # the sign of the threshold is irrelevant
    result = threshold(grid, t, 'abs')
    inside = np.abs(grid) <= abs(t)
    np.testing.assert_array_equal(np.abs(result[inside]), abs(t))
    np.testing.assert_array_equal(np.sign(result[inside]), np.where(grid[inside] >= 0, 1, -1))
    np.testing.assert_array_equal(result[~inside], grid[~inside])


def test_absolute_ceiling(grid):
    result = threshold(grid, 1.5, 'maximum', 'absolute')
    assert np.all(np.abs(result) <= 1.5)
    inside = np.abs(grid) <= 1.5
    np.testing.assert_array_equal(result[inside], grid[inside])
    np.testing.assert_array_equal(result, np.clip(grid, -1.5, 1.5))


def test_absolute_band(grid):
    a, b = 1.0, 3.0
    result = threshold(grid, -b, -a, 'abs')
    positive = grid >= 0
    assert np.all((result[positive] >= a) & (result[positive] <= b))
    assert np.all((result[~positive] >= -b) & (result[~positive] <= -a))
    in_band = (np.abs(grid) >= a) & (np.abs(grid) <= b)
    np.testing.assert_array_equal(result[in_band], grid[in_band])


def test_zero_is_positive():
    data = np.array([0.0, -0.0])
    np.testing.assert_array_equal(threshold(data, 1, 'abs'), [1, 1])
    np.testing.assert_array_equal(threshold(data, 1, 2, 'abs'), [1, 1])


@pytest.mark.parametrize("arguments", [
    (1,), (1, 'max'), (-1, 2), (1, 'abs'), (1, 'max', 'abs'), (1, 2, 'abs'), (-3, 4, 'abs'),
])
def test_nan_passthrough_and_idempotence(grid, arguments):
    data = grid.copy()
    data[::3, ::2] = np.nan
    result = threshold(data, *arguments)
    assert result.shape == data.shape
    np.testing.assert_array_equal(np.isnan(result), np.isnan(data))
    np.testing.assert_array_equal(threshold(result, *arguments), result)


def test_opposite_signs_collapse(grid):
    np.testing.assert_array_equal(threshold(grid, -3, 4, 'abs'), threshold(grid, 4, 'abs', 'max'))
    np.testing.assert_array_equal(threshold(grid, 4, -3, 'abs'), threshold(grid, 4, 'abs', 'max'))
    np.testing.assert_array_equal(threshold(grid, -2, 2, 'abs'), np.clip(grid, -2, 2))


def test_source_is_not_modified(grid):
    data = grid.copy()
    result = threshold(data, 1, 2, 'abs')
    np.testing.assert_array_equal(data, grid)
    assert result is not data


@pytest.mark.parametrize("dtype, expected_dtype", [
    (np.int16, np.float64),
    (np.int64, np.float64),
    (np.uint8, np.float64),
    (np.float32, np.float32),
    (np.float64, np.float64),
])
def test_dtypes(dtype, expected_dtype):
    data = np.arange(0, 10, dtype=dtype).reshape(2, 5)
    result = threshold(data, 2, 6)
    assert result.dtype == expected_dtype
    assert result.shape == data.shape
    np.testing.assert_array_equal(result, np.clip(data, 2, 6))


def test_integer_data_with_fractional_threshold():
    np.testing.assert_array_equal(threshold([0, 1, 2], 0.5), [0.5, 1, 2])


@pytest.mark.parametrize("shape", [(), (0,), (7,), (3, 4, 5), (2, 1, 3, 2)])
def test_shapes(shape):
    data = np.linspace(-3, 3, int(np.prod(shape))).reshape(shape)
    assert threshold(data, 1, 2, 'abs').shape == shape


@pytest.mark.parametrize("data", [
    np.array([1 + 1j, 2]),
    np.array([True, False]),
    np.array(['a', 'b']),
    np.array([1, 'a'], dtype=object),
])
def test_non_numeric_data_raises(data):
    with pytest.raises(TypeError):
        threshold(data, 1)


def test_errors_raised_before_processing():
    with pytest.raises(ThresholdTypeError):
        threshold(np.array([1j]), 1, 2, 3)


@pytest.mark.parametrize("arguments, message", [
    ((), 'no threshold provided'),
    (('abs',), 'no threshold provided'),
    ((1, 2, 3), 'too many thresholds'),
    ((np.nan,), 'threshold is NaN'),
    ((1, np.nan), 'threshold is NaN'),
])
def test_configuration_errors(arguments, message):
    with pytest.raises(ConfigError, match=message):
        threshold(np.zeros(3), *arguments)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        resolve_configuration()


@pytest.mark.parametrize("argument", [1j, None, True, [1, 2]])
def test_invalid_threshold_types(argument):
    with pytest.raises(ThresholdTypeError):
        resolve_configuration(argument)


@pytest.mark.parametrize("arguments, thresholds, use_absolute, treat_as_minimum, policy", [
    ((1,), (1.0,), False, True, 'floor'),
    ((1, 'MAX'), (1.0,), False, False, 'ceiling'),
    ((2, 1), (1.0, 2.0), False, True, 'clamp'),
    ((1, 'Abs'), (1.0,), True, True, 'absolute_floor'),
    (('maximum', np.float32(1), 'ABSOLUTE'), (1.0,), True, False, 'absolute_ceiling'),
    ((1, 2, 'abs'), (1.0, 2.0), True, True, 'absolute_band'),
    ((-1, -2, 'abs'), (-2.0, -1.0), True, True, 'absolute_band'),
    ((0, -2, 'abs'), (2.0,), True, False, 'absolute_ceiling'),
    ((-3, 4, 'abs'), (4.0,), True, False, 'absolute_ceiling'),
    ((-4, 3, 'abs'), (4.0,), True, False, 'absolute_ceiling'),
    ((1, 'unknown', 'mode'), (1.0,), False, True, 'floor'),
    ((np.array(3),), (3.0,), False, True, 'floor'),
])
def test_resolve_configuration(arguments, thresholds, use_absolute, treat_as_minimum, policy):
    configuration = resolve_configuration(*arguments)
    assert configuration.thresholds == thresholds
    assert configuration.use_absolute is use_absolute
    assert configuration.treat_as_minimum is treat_as_minimum
    assert configuration.policy == policy


def test_keyword_modes():
    configuration = resolve_configuration(1, absolute=True, maximum=True)
    assert configuration.policy == 'absolute_ceiling'


def test_configuration_validation():
    assert ThresholdConfiguration(thresholds=(3, 1)).thresholds == (1.0, 3.0)
    assert ThresholdConfiguration(thresholds=2).thresholds == (2.0,)
    with pytest.raises(ConfigError):
        ThresholdConfiguration(thresholds=())
    with pytest.raises(ConfigError):
        ThresholdConfiguration(thresholds=(1, 2, 3))
    with pytest.raises(ConfigError):
        ThresholdConfiguration(thresholds=(float('nan'),))


def test_configuration_from_dict(grid):
    configuration = ThresholdConfiguration.from_dict({'thresholds': [1, 2], 'absolute': True})
    np.testing.assert_array_equal(apply_threshold(grid, configuration), threshold(grid, 1, 2, 'abs'))
    configuration = ThresholdConfiguration.from_dict({'thresholds': 1, 'maximum': True})
    assert configuration.policy == 'ceiling'


def test_apply_threshold_requires_configuration(grid):
    with pytest.raises(ThresholdTypeError):
        apply_threshold(grid, (1, 2))


@pytest.mark.parametrize("processes", [1, 2, 4, None])
def test_parallel_processing_gives_identical_results(processes, monkeypatch):
    import ClearThresh.ParallelProcessing.DataProcessing.ArrayProcessing as ap
    monkeypatch.setattr(ap, 'default_cutoff', 10)
    data = np.random.default_rng(0).normal(0, 3, size=(13, 17, 5))
    data[data > 6] = np.nan
    expected = threshold(data, 1, 2, 'abs', processes=1)
    np.testing.assert_array_equal(threshold(data, 1, 2, 'abs', processes=processes), expected)


def test_non_contiguous_source():
    data = np.arange(-10, 10, dtype=float).reshape(4, 5).T
    np.testing.assert_array_equal(threshold(data, -2, 3), np.clip(data, -2, 3))


def test_verbose(capsys):
    threshold(np.arange(5), 1, verbose=True)
    out = capsys.readouterr().out
    assert 'threshold: initialized' in out
    assert 'elapsed time' in out


@pytest.mark.parametrize("thresholds", [(-3, 4), (4, -3), (3, -4)])
def test_direct_configuration_collapses_opposite_signs(grid, thresholds):
    configuration = ThresholdConfiguration(thresholds, use_absolute=True)
    assert configuration.thresholds == (4.0,)
    assert configuration.treat_as_minimum is False
    assert configuration.policy == 'absolute_ceiling'
    np.testing.assert_array_equal(apply_threshold(grid, configuration), threshold(grid, 4, 'abs', 'max'))
    np.testing.assert_array_equal(apply_threshold([-5, -1, 0, 1, 5], configuration), [-4, -1, 0, 1, 4])


def test_direct_configuration_keeps_same_sign_band():
    configuration = ThresholdConfiguration((-3, -1), use_absolute=True)
    assert configuration.thresholds == (-3.0, -1.0)
    assert configuration.policy == 'absolute_band'
    assert ThresholdConfiguration((-3, 4)).policy == 'clamp'
