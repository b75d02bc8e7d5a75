import numpy as np
import pytest

from pixel_print.core_types import FrameReport
from pixel_print.mode import ColorMode
from pixel_print.session import PrintSession, RunState
from pixel_print.settings import PrintSettings
from pixel_print.surface import ArraySurface

from conftest import RecordingSurface, make_buffer, random_buffer


def _session(surface, **settings):
    return PrintSession(PrintSettings(**settings), surface, seed=1234)


def test_operations_before_load_are_noops(surface):
    session = _session(surface)
    assert session.frame_tick() == FrameReport()
    assert session.advance_cluster() == FrameReport()
    session.start_run()
    session.set_randomized(True)
    assert session.progress() == (0, 0)
    assert session.state is RunState.IDLE
    assert surface.events == []


def test_full_mode_three_pixels_one_per_tick(surface):
    session = _session(surface, pixels_per_frame=1)
    session.load_pixels(make_buffer([(1, 2, 3), (4, 5, 6), (7, 8, 9)], width=3))
    session.start_run()
    assert surface.events == [("clear",)]

    reports = [session.frame_tick() for _ in range(4)]
    assert [r.percent for r in reports] == [33, 67, 100, 100]
    assert [r.complete for r in reports] == [False, False, True, True]
    assert [r.drawn for r in reports] == [1, 1, 1, 0]
    assert surface.paints == [
        ("paint", 0, 0, (1, 2, 3)),
        ("paint", 1, 0, (4, 5, 6)),
        ("paint", 2, 0, (7, 8, 9)),
    ]
    assert reports[1].describe() == "printed 2/3 (67%)"


def test_percent_never_reads_full_before_complete(surface):
    session = _session(surface, pixels_per_frame=199)
    session.load_pixels(random_buffer(200, 1, seed=2))
    session.start_run()

    first = session.frame_tick()
    assert (first.painted, first.total) == (199, 200)
    assert first.percent == 99
    assert not first.complete
    assert first.describe() == "printed 199/200 (99%)"

    last = session.frame_tick()
    assert last.percent == 100
    assert last.complete


def test_tick_before_start_does_not_paint(surface):
    session = _session(surface)
    session.load_pixels(make_buffer([(1, 2, 3), (4, 5, 6)], width=2))
    report = session.frame_tick()
    assert report.drawn == 0 and not report.complete
    assert surface.events == []


def test_dominant_two_pixel_example(surface):
    session = _session(surface, color_mode="dominant")
    session.load_pixels(make_buffer([(10, 200, 10), (200, 10, 10)], width=2))
    session.start_run()
    report = session.frame_tick()
    assert surface.paints == [
        ("paint", 0, 0, (10, 200, 10)),
        ("paint", 1, 0, (200, 10, 10)),
    ]
    assert report.complete
    assert (report.painted, report.total, report.percent) == (2, 2, 100)


def _two_cluster_session(surface, **settings):
    session = _session(surface, color_mode="palette", palette_count=2, **settings)
    session.load_pixels(
        make_buffer([(0, 0, 0), (250, 250, 250), (2, 2, 2), (248, 248, 248)], width=4)
    )
    return session


@pytest.mark.parametrize("ppf", [1, 10])
def test_palette_clear_between_clusters_once(ppf):
    surface = RecordingSurface()
    session = _two_cluster_session(surface, pixels_per_frame=ppf, clear_between=True)
    session.start_run()
    surface.reset()
    while not session.frame_tick().complete:
        pass
    assert surface.events == [
        ("paint", 0, 0, (1, 1, 1)),
        ("paint", 2, 0, (1, 1, 1)),
        ("clear",),
        ("paint", 1, 0, (249, 249, 249)),
        ("paint", 3, 0, (249, 249, 249)),
    ]


def test_palette_without_clear_between(surface):
    session = _two_cluster_session(surface, pixels_per_frame=3)
    session.start_run()
    surface.reset()
    session.frame_tick()
    session.frame_tick()
    assert surface.clears == 0
    assert len(surface.paints) == 4
    assert session.complete


def test_manual_cluster_advance(surface):
    session = _two_cluster_session(surface, pixels_per_frame=1, clear_between=True)
    session.start_run()
    surface.reset()
    session.frame_tick()
    report = session.advance_cluster()
    assert (report.painted, report.total) == (2, 4)
    assert not report.complete
    session.frame_tick()
    assert surface.events == [
        ("paint", 0, 0, (1, 1, 1)),
        ("clear",),
        ("paint", 1, 0, (249, 249, 249)),
    ]
    report = session.advance_cluster()
    assert report.complete
    assert report.percent == 100
    # terminal until restarted
    assert session.frame_tick().drawn == 0
    assert session.advance_cluster().complete


def test_advance_cluster_ignored_outside_palette_mode(surface):
    session = _session(surface, pixels_per_frame=1)
    session.load_pixels(make_buffer([(1, 2, 3), (4, 5, 6)], width=2))
    session.start_run()
    report = session.advance_cluster()
    assert report.painted == 0
    assert session.state is RunState.RUNNING


@pytest.mark.parametrize("mode", ["full", "red", "green", "blue"])
def test_many_small_ticks_match_one_big_tick(mode):
    buf = random_buffer(9, 7, seed=2)
    n = buf.total

    small = ArraySurface(buf.width, buf.height)
    a = PrintSession(
        PrintSettings(color_mode=mode, pixels_per_frame=1, random_order=True), small, seed=9
    )
    a.load_pixels(buf)
    a.start_run()
    for _ in range(n):
        a.frame_tick()

    big = ArraySurface(buf.width, buf.height)
    b = PrintSession(
        PrintSettings(color_mode=mode, pixels_per_frame=n, random_order=True), big, seed=9
    )
    b.load_pixels(buf)
    b.start_run()
    b.frame_tick()

    assert a.complete and b.complete
    assert np.array_equal(small.pixels, big.pixels)


def test_channel_mode_zeroes_other_channels():
    buf = random_buffer(5, 4, seed=8)
    canvas = ArraySurface(buf.width, buf.height)
    session = PrintSession(PrintSettings(color_mode="green", pixels_per_frame=100), canvas)
    session.load_pixels(buf)
    session.start_run()
    session.frame_tick()
    rgb = canvas.rgb().reshape(-1, 3)
    assert np.all(rgb[:, 0] == 0) and np.all(rgb[:, 2] == 0)
    assert np.array_equal(rgb[:, 1], buf.rgb[:, 1])


@pytest.mark.parametrize("mode", list(ColorMode))
def test_progress_monotonic_and_every_pixel_painted_once(mode):
    buf = random_buffer(6, 5, seed=4)
    surface = RecordingSurface()
    session = PrintSession(
        PrintSettings(color_mode=mode, pixels_per_frame=4, palette_count=5, random_order=True),
        surface,
        seed=3,
    )
    session.load_pixels(buf)
    session.start_run()
    fractions = []
    report = session.report()
    while not report.complete:
        report = session.frame_tick()
        fractions.append(report.fraction)
    assert fractions == sorted(fractions)
    assert fractions[-1] == 1.0
    coords = {(e[1], e[2]) for e in surface.paints}
    assert len(surface.paints) == buf.total
    assert len(coords) == buf.total


def test_mode_switch_stops_run_and_keeps_cursors(surface):
    session = _session(surface, pixels_per_frame=1)
    session.load_pixels(make_buffer([(1, 2, 3), (4, 5, 6), (7, 8, 9)], width=3))
    session.start_run()
    session.frame_tick()

    session.settings.color_mode = "red"
    report = session.frame_tick()
    assert report.drawn == 0
    assert session.state is RunState.IDLE
    assert session.progress() == (0, 3)

    session.settings.color_mode = "full"
    assert session.frame_tick().drawn == 0
    assert session.progress() == (1, 3)

    session.start_run()
    assert session.progress() == (0, 3)
    assert session.frame_tick().drawn == 1


def test_set_randomized_rebuilds_orders_only(surface):
    session = _session(surface, color_mode="palette", palette_count=3)
    session.load_pixels(random_buffer(8, 8, seed=1))
    clusters = session.clusters
    groups = session.groups

    session.set_randomized(True)
    assert session.settings.random_order is True
    assert session.clusters is clusters
    assert session.groups is groups
    order = session.steppers[ColorMode.FULL].order
    assert order is not None
    assert np.array_equal(np.sort(order), np.arange(64))

    session.set_randomized(False)
    assert session.steppers[ColorMode.FULL].order is None


def test_set_randomized_resets_finished_run(surface):
    session = _session(surface, pixels_per_frame=10)
    session.load_pixels(make_buffer([(1, 2, 3), (4, 5, 6)], width=2))
    session.start_run()
    assert session.frame_tick().complete
    session.set_randomized(True)
    assert session.state is RunState.IDLE
    assert session.progress() == (0, 2)


def test_recluster_only_when_palette_count_changes(surface):
    session = _session(surface, color_mode="palette", palette_count=3)
    session.load_pixels(random_buffer(8, 8, seed=1))
    first = session.clusters
    session.start_run()
    assert session.clusters is first

    session.settings.palette_count = 5
    session.start_run()
    assert session.clusters is not first
    assert session.clusters.k == 5
    assert session.steppers[ColorMode.PALETTE].pass_count == 5


def test_new_load_resets_state(surface):
    session = _session(surface, pixels_per_frame=1)
    session.load_pixels(make_buffer([(1, 2, 3), (4, 5, 6)], width=2))
    session.start_run()
    session.frame_tick()
    session.load_pixels(make_buffer([(9, 9, 9)] * 6, width=3))
    assert session.state is RunState.IDLE
    assert session.progress() == (0, 6)
