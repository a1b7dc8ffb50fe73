from simulation import Algorithm, run_algorithm
from utils.visualization import Visualizer


def test_format_step_lists_every_process(two_processes):
    result = run_algorithm(Algorithm.SJF, two_processes)
    steps = result['steps']

    text = Visualizer.format_step(steps[3], 3, len(steps))
    assert "Step 4/15" in text
    assert "P2 arrived" in text
    assert "Running" in text and "Ready" in text


def test_charts_are_saved(tmp_path, two_processes):
    visualizer = Visualizer()
    results = [run_algorithm(a, two_processes) for a in Algorithm]

    gantt_path = tmp_path / "gantt.png"
    visualizer.draw_gantt_chart(results[0]['gantt_chart'], results[0]['algorithm'],
                                save_path=str(gantt_path))
    comparison_path = tmp_path / "comparison.png"
    visualizer.compare_algorithms(results, save_path=str(comparison_path))

    assert gantt_path.stat().st_size > 0
    assert comparison_path.stat().st_size > 0
