import numpy as np
import pytest

import ClearThresh.ParallelProcessing.DataProcessing.ArrayProcessing as ap
from ClearThresh.Utils.utilities import sanitize_n_processes


@pytest.mark.parametrize("size, processes, blocks_per_process", [
    (0, 4, 10),
    (1, 4, 10),
    (7, 4, 10),
    (100, 3, 10),
    (1001, 8, 2),
])
def test_block_ranges_cover_range(size, processes, blocks_per_process):
    ranges = ap.block_ranges(size, processes, blocks_per_process)
    covered = [i for start, stop in ranges for i in range(start, stop)]
    assert covered == list(range(size))
    assert len(ranges) <= max(1, processes * blocks_per_process)


@pytest.mark.parametrize("processes, cutoff", [(1, 0), (3, 0), (3, 10 ** 9), (None, 0)])
def test_process_elementwise(processes, cutoff):
    source = np.arange(60, dtype=float).reshape(3, 4, 5)
    sink = np.empty_like(source)
    result = ap.process_elementwise(np.sqrt, source, sink, processes=processes, blocks_per_process=3,
                                    cutoff=cutoff)
    assert result is sink
    np.testing.assert_allclose(sink, np.sqrt(source))


def test_process_elementwise_shape_mismatch():
    with pytest.raises(ValueError):
        ap.process_elementwise(np.sqrt, np.zeros((2, 3)), np.zeros((3, 2)))


def test_process_elementwise_requires_contiguous_sink():
    with pytest.raises(ValueError):
        ap.process_elementwise(np.sqrt, np.zeros((3, 2)), np.zeros((2, 3)).T)


def test_worker_errors_propagate():
    def fail(data):
        raise RuntimeError('boom')

    with pytest.raises(RuntimeError, match='boom'):
        ap.process_elementwise(fail, np.zeros(100), np.zeros(100), processes=2, cutoff=0)


def test_initialize_processing(capsys):
    processes, timer = ap.initialize_processing(processes='serial', verbose=True, function='test')
    assert processes == 1
    ap.finalize_processing(verbose=True, function='test', timer=timer)
    out = capsys.readouterr().out
    assert 'test: initialized, processes=1.' in out
    assert 'test: elapsed time' in out

    processes, timer = ap.initialize_processing(processes=None)
    assert processes == ap.default_processes
    assert timer is None


def test_sanitize_n_processes(monkeypatch):
    monkeypatch.setattr('multiprocessing.cpu_count', lambda: 8)
    assert sanitize_n_processes(None) == 8
    assert sanitize_n_processes(-2) == 6
    assert sanitize_n_processes(-20) == 1
    assert sanitize_n_processes(3) == 3
