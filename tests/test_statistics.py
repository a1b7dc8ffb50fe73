import pytest

from core.statistics import SchedulerStats, build_gantt_chart, IDLE_PID
from simulation import Algorithm, simulate

from helpers import make_processes


def _chart(steps):
    return [(e.name, e.start_time, e.end_time) for e in build_gantt_chart(steps)]


def test_round_robin_gantt_and_stats(two_processes):
    steps = simulate(Algorithm.ROUND_ROBIN, two_processes, quantum=2)

    assert _chart(steps) == [("P1", 0, 2), ("P2", 2, 4), ("P1", 4, 6), ("P2", 6, 7), ("P1", 7, 8)]

    stats = SchedulerStats.from_steps(steps)
    averages = stats.calculate_averages()
    assert averages['avg_waiting_time'] == pytest.approx(3.0)
    assert averages['avg_turnaround_time'] == pytest.approx(7.0)
    assert averages['avg_response_time'] == pytest.approx(0.5)
    assert averages['cpu_utilization'] == pytest.approx(100.0)
    assert averages['context_switches'] == 4
    assert averages['total_time'] == 8


def test_per_process_results(two_processes):
    stats = SchedulerStats.from_steps(simulate(Algorithm.SJF, two_processes))
    results = {r.name: r for r in stats.results}

    assert results["P1"].start_time == 0
    assert results["P1"].finish_time == 5
    assert results["P1"].waiting_time == 0
    assert results["P2"].start_time == 5
    assert results["P2"].finish_time == 8
    assert results["P2"].turnaround_time == 7
    assert results["P2"].waiting_time == 4
    assert results["P2"].response_time == 4


def test_idle_intervals_in_gantt():
    steps = simulate(Algorithm.FCFS, make_processes(("P1", 2, 2), ("P2", 10, 1)))
    chart = build_gantt_chart(steps)

    assert [(e.pid, e.start_time, e.end_time) for e in chart] == [
        (IDLE_PID, 0, 2), (1, 2, 4), (IDLE_PID, 4, 10), (2, 10, 11),
    ]
    averages = SchedulerStats.from_steps(steps).calculate_averages()
    assert averages['cpu_utilization'] == pytest.approx(3 / 11 * 100)
    assert averages['context_switches'] == 1


def test_empty_stats():
    assert SchedulerStats().calculate_averages()['avg_waiting_time'] == 0
