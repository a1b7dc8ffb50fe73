from utils.input_parser import InputParser


def test_parse_file(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text(
        "# comment\n"
        "\n"
        "P1,0,5,3\n"
        "P2, 1, 3\n"
        "bad,x,3\n"
        "P3,2,0,1\n"
        "P4,4,2,1\n",
        encoding="utf-8",
    )

    processes = InputParser.parse_file(str(path))

    assert [p.name for p in processes] == ["P1", "P2", "P4"]
    assert [p.pid for p in processes] == [1, 2, 3]
    assert processes[1].priority == 1
    assert (processes[0].arrival_time, processes[0].burst_time, processes[0].priority) == (0, 5, 3)


def test_missing_file_returns_empty(tmp_path):
    assert InputParser.parse_file(str(tmp_path / "missing.txt")) == []


def test_saved_file_can_be_loaded(tmp_path):
    processes = InputParser.generate_random_processes(num_processes=4, seed=7)
    path = tmp_path / "saved.txt"
    InputParser.save_processes_to_file(processes, str(path))

    loaded = InputParser.parse_file(str(path))
    assert [(p.name, p.arrival_time, p.burst_time, p.priority) for p in loaded] == \
           [(p.name, p.arrival_time, p.burst_time, p.priority) for p in processes]


def test_random_generation_is_seeded_and_valid():
    first = InputParser.generate_random_processes(num_processes=6, max_burst=4, seed=42)
    second = InputParser.generate_random_processes(num_processes=6, max_burst=4, seed=42)

    assert [(p.arrival_time, p.burst_time) for p in first] == \
           [(p.arrival_time, p.burst_time) for p in second]
    assert all(1 <= p.burst_time <= 4 and p.arrival_time >= 0 and p.priority >= 1 for p in first)
