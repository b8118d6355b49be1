from omnistream_installer.progress import Gauge, ProgressEvent
from omnistream_installer.steps.step_20_provision_packages import package_progress


def test_gauge_never_goes_backwards():
    events = []
    g = Gauge("t", events.append)
    g.update(40, "half")
    g.update(20)
    g.update(150)
    assert [e.percent for e in events] == [40, 40, 100]
    assert events[0] == ProgressEvent(40, "half")


def test_gauge_clamps_negative():
    events = []
    Gauge("t", events.append).update(-5)
    assert events[0].percent == 0


def test_package_progress_spans_10_to_under_90():
    total = 26
    values = [package_progress(i, total) for i in range(total)]
    assert values[0] == 10
    assert values[-1] < 90
    assert values == sorted(values)
    assert package_progress(0, 0) == 10
