"""
입력 데이터 파서 및 프로세스 생성 모듈
"""

import csv
import logging
import random
from typing import List, Optional

from core.process import Process

logger = logging.getLogger(__name__)


class InputParser:
    """입력 파일 파서"""

    @staticmethod
    def parse_file(filename: str) -> List[Process]:
        """
        CSV 파일에서 프로세스 정보 읽기

        파일 형식: 이름,도착시간,실행시간[,우선순위]
        예: P1,0,5,2

        Args:
            filename: 입력 파일 경로

        Returns:
            프로세스 리스트 (PID는 1부터 순서대로 할당)
        """
        try:
            with open(filename, 'r', encoding='utf-8', newline='') as f:
                processes = InputParser.parse_lines(f)
        except FileNotFoundError:
            logger.error("Input file '%s' not found", filename)
            return []
        except OSError as e:
            logger.error("Failed to read '%s': %s", filename, e)
            return []

        logger.info("Loaded %d processes from %s", len(processes), filename)
        return processes

    @staticmethod
    def parse_lines(lines) -> List[Process]:
        """텍스트 라인들에서 프로세스 파싱 (주석/빈 줄 무시, 잘못된 줄은 건너뜀)"""
        processes = []
        content = (line for line in lines
                   if line.strip() and not line.lstrip().startswith('#'))

        for parts in csv.reader(content, skipinitialspace=True):
            try:
                process = InputParser._create_process_from_parts(parts, len(processes) + 1)
            except ValueError as e:
                logger.warning("Skipping line %r: %s", ",".join(parts), e)
                continue
            processes.append(process)

        return processes

    @staticmethod
    def _create_process_from_parts(parts: List[str], pid: int) -> Process:
        """파싱된 부분에서 프로세스 객체 생성"""
        parts = [part.strip() for part in parts]
        if len(parts) < 3:
            raise ValueError(f"expected at least 3 fields, got {len(parts)}")

        name = parts[0]
        if not name:
            raise ValueError("process name is empty")

        try:
            arrival_time = int(parts[1])
            burst_time = int(parts[2])
            priority = int(parts[3]) if len(parts) > 3 and parts[3] else 1
        except ValueError as e:
            raise ValueError(f"numeric field error: {e}")

        # 검증
        if arrival_time < 0:
            raise ValueError(f"arrival time must be >= 0: {arrival_time}")
        if burst_time <= 0:
            raise ValueError(f"burst time must be > 0: {burst_time}")
        if priority < 1:
            raise ValueError(f"priority must be >= 1: {priority}")

        return Process(pid, name, arrival_time, burst_time, priority)

    @staticmethod
    def generate_random_processes(num_processes: int = 5,
                                  max_arrival: int = 10,
                                  max_burst: int = 8,
                                  max_priority: int = 5,
                                  seed: Optional[int] = None) -> List[Process]:
        """
        랜덤 프로세스 생성

        Args:
            num_processes: 생성할 프로세스 수
            max_arrival: 최대 도착 시간
            max_burst: 최대 실행 시간
            max_priority: 최대 우선순위 값
            seed: 랜덤 시드

        Returns:
            프로세스 리스트
        """
        rng = random.Random(seed)

        processes = []
        for pid in range(1, num_processes + 1):
            processes.append(Process(
                pid,
                f"P{pid}",
                rng.randint(0, max_arrival),
                rng.randint(1, max_burst),
                rng.randint(1, max_priority),
            ))

        logger.info("Generated %d random processes", num_processes)
        return processes

    @staticmethod
    def save_processes_to_file(processes: List[Process], filename: str):
        """
        프로세스 리스트를 파일로 저장

        Args:
            processes: 저장할 프로세스 리스트
            filename: 출력 파일 경로
        """
        with open(filename, 'w', encoding='utf-8', newline='') as f:
            f.write("# CPU Scheduling Simulator Input Data\n")
            f.write("# Format: Name,ArrivalTime,BurstTime,Priority\n")
            writer = csv.writer(f, lineterminator='\n')
            for process in processes:
                writer.writerow([process.name, process.arrival_time,
                                 process.burst_time, process.priority])

        logger.info("Saved %d processes to %s", len(processes), filename)

    @staticmethod
    def print_process_summary(processes: List[Process]):
        """프로세스 요약 정보 출력"""
        print("\n" + "="*70)
        print("프로세스 요약")
        print("="*70)
        print(f"{'PID':<6} {'이름':<12} {'도착시간':>8} {'실행시간':>8} {'우선순위':>8}")
        print("-"*70)

        for p in sorted(processes, key=lambda x: (x.arrival_time, x.pid)):
            print(f"{p.pid:<6} {p.name:<12} {p.arrival_time:>8} "
                  f"{p.burst_time:>8} {p.priority:>8}")

        print("="*70)
        print(f"전체 프로세스: {len(processes)}개, "
              f"총 실행시간: {sum(p.burst_time for p in processes)}\n")
