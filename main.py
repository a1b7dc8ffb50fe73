#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CPU 스케줄링 스텝 시뮬레이터 - 메인 실행 파일
알고리즘 선택 및 스텝 단위 재생 기능 포함
"""

import logging
import os
import re
import sys

from core.errors import SimulationError
from core.scheduler_base import DEFAULT_QUANTUM, normalize_quantum
from simulation import Algorithm, ALGORITHMS, SimulationSession, Playback, summarize
from utils.input_parser import InputParser
from utils.visualization import Visualizer


# 메뉴 번호 -> 알고리즘
MENU = {
    '1': Algorithm.FCFS,
    '2': Algorithm.SJF,
    '3': Algorithm.PRIORITY,
    '4': Algorithm.ROUND_ROBIN,
    'all': None
}

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
SAMPLE_DATA = os.path.join(SCRIPT_DIR, "data", "sample_processes.txt")


def print_banner():
    """배너 출력"""
    print("\n" + "="*70)
    print(" "*20 + "CPU 스케줄링 스텝 시뮬레이터")
    print("="*70 + "\n")


def print_algorithm_menu():
    """알고리즘 선택 메뉴 출력"""
    print("\n" + "="*70)
    print("스케줄링 알고리즘 선택")
    print("="*70)
    for key, algorithm in MENU.items():
        if algorithm is not None:
            print(f"  {key}. {ALGORITHMS[algorithm]['name']}")
    print("  all. 모든 알고리즘 실행 (결과 비교)")
    print("  0. 종료")
    print("="*70)


def get_user_choice():
    """사용자 선택 입력"""
    while True:
        choice = input("\n선택하세요: ").strip().lower()

        if choice == '0':
            print("\n프로그램을 종료합니다...")
            sys.exit(0)

        if choice in MENU:
            return choice

        print("[오류] 잘못된 선택입니다. 다시 시도하세요.")


def ask_quantum() -> int:
    """Round Robin 타임 퀀텀 입력 (잘못된 값이면 기본값)"""
    raw = input(f"타임 퀀텀 입력 (기본값 {DEFAULT_QUANTUM}): ").strip()
    return normalize_quantum(raw or None)


def print_help():
    print("명령: n=다음  p=이전  j <번호>=이동  r=처음으로  a=자동 재생  q=종료")


def step_through(session: SimulationSession, visualizer: Visualizer):
    """스텝 로그를 사용자 입력에 따라 앞/뒤로 이동하며 출력"""
    total = len(session.steps)
    print_help()
    print(visualizer.format_step(session.current_step(), session.current_index, total))

    while True:
        command = input("\n> ").strip().lower()

        if command in ('', 'n'):
            if session.is_at_end():
                print("[정보] 마지막 스텝입니다.")
                continue
            session.next_step()
        elif command == 'p':
            if session.is_at_start():
                print("[정보] 첫 번째 스텝입니다.")
                continue
            session.previous_step()
        elif command.startswith('j'):
            try:
                session.jump_to(int(command[1:].strip()) - 1)
            except (ValueError, IndexError):
                print(f"[오류] 1부터 {total} 사이의 번호를 입력하세요.")
                continue
        elif command == 'r':
            session.rewind()
        elif command == 'a':
            playback = Playback(
                session, interval=0.5,
                on_step=lambda index, step: print(visualizer.format_step(step, index, total)))
            print("[정보] 자동 재생 중... Enter를 누르면 멈춥니다.")
            playback.start()
            input()
            playback.stop()
            continue
        elif command == 'q':
            return
        else:
            print_help()
            continue

        print(visualizer.format_step(session.current_step(), session.current_index, total))


def run_single_algorithm(algorithm, processes, quantum=DEFAULT_QUANTUM, interactive=True):
    """단일 알고리즘 실행"""
    print(f"\n{'='*70}")
    print(f"실행 중: {ALGORITHMS[algorithm]['name']}")
    print(f"{'='*70}\n")

    session = SimulationSession(processes, algorithm, quantum)
    try:
        steps = session.start()
    except SimulationError as e:
        print(f"[오류] {ALGORITHMS[algorithm]['name']} 실행 실패: {e}")
        return None

    print(f"[완료] {len(steps)}개의 스텝이 생성되었습니다 (종료 시각 t={steps.last.time})")
    if interactive:
        step_through(session, Visualizer())

    return summarize(algorithm, steps)


def run_all_algorithms(processes, quantum=DEFAULT_QUANTUM):
    """모든 알고리즘 실행"""
    results = []

    print("\n" + "="*70)
    print("모든 스케줄링 알고리즘 실행")
    print("="*70 + "\n")

    for index, algorithm in enumerate(ALGORITHMS, 1):
        print(f"[{index}/{len(ALGORITHMS)}] {ALGORITHMS[algorithm]['name']} 실행 중...")
        result = run_single_algorithm(algorithm, processes, quantum, interactive=False)
        if result:
            results.append(result)

    return results


def save_results(results, output_dir="simulation_results"):
    """결과 저장"""
    os.makedirs(output_dir, exist_ok=True)

    visualizer = Visualizer()

    # 통계 테이블 출력
    visualizer.print_statistics_table(results)
    for result in results:
        visualizer.print_process_details(result)

    # Gantt Charts 생성
    print("Gantt 차트 생성 중...")
    for result in results:
        safe_algo = re.sub(r'[^A-Za-z0-9]+', '_', result['algorithm']).strip('_')
        save_path = os.path.join(output_dir, f"gantt_{safe_algo}.png")
        visualizer.draw_gantt_chart(result['gantt_chart'], result['algorithm'],
                                    save_path=save_path, show=False)
    print(f"[완료] Gantt 차트가 '{output_dir}/' 디렉토리에 저장되었습니다\n")

    # 비교 그래프 (2개 이상일 때만)
    if len(results) > 1:
        comparison_path = os.path.join(output_dir, "comparison.png")
        visualizer.compare_algorithms(results, save_path=comparison_path, show=False)
        print("[완료] 비교 차트 저장됨\n")

    results_file = os.path.join(output_dir, "results.txt")
    save_results_to_file(results, results_file)


def save_results_to_file(results, filename):
    """결과와 전체 스텝 로그를 텍스트 파일로 저장"""
    with open(filename, 'w', encoding='utf-8') as f:
        f.write("="*100 + "\n")
        f.write("CPU 스케줄링 시뮬레이션 결과\n")
        f.write("="*100 + "\n\n")

        f.write(f"{'알고리즘':<15} {'평균 대기':>12} {'평균 반환':>12} {'평균 응답':>12} "
                f"{'CPU 이용률(%)':>15} {'문맥 교환':>10}\n")
        f.write("-"*100 + "\n")
        for result in results:
            stats = result['statistics']
            f.write(f"{result['algorithm']:<15} "
                    f"{stats['avg_waiting_time']:>12.2f} "
                    f"{stats['avg_turnaround_time']:>12.2f} "
                    f"{stats['avg_response_time']:>12.2f} "
                    f"{stats['cpu_utilization']:>15.2f} "
                    f"{stats['context_switches']:>10}\n")

        for result in results:
            f.write("\n" + "="*100 + "\n")
            f.write(f"알고리즘: {result['algorithm']}\n")
            f.write("="*100 + "\n")
            for index, step in enumerate(result['steps'], 1):
                f.write(f"[{index:4d}] t={step.time:<4d} {step.description}\n")

    print(f"[완료] 결과가 {filename}에 저장되었습니다")


def select_input_file():
    """입력 파일 선택"""
    print("\n" + "="*70)
    print("입력 선택")
    print("="*70)
    print("  0. 샘플 데이터 - data/sample_processes.txt")
    print("  1. 랜덤 데이터 (자동 생성)")
    print("  2. 파일 경로 직접 입력")
    print("="*70)

    while True:
        choice = input("\n입력 옵션 선택 (0-2): ").strip()

        if choice == '0':
            return SAMPLE_DATA
        elif choice == '1':
            return None
        elif choice == '2':
            path = input("파일 경로: ").strip()
            if os.path.exists(path):
                return path
            print(f"[오류] 파일을 찾을 수 없습니다: {path}")
        else:
            print("[오류] 0, 1, 또는 2를 입력하세요.")


def main():
    """메인 함수"""
    print_banner()

    input_file = select_input_file()
    if input_file is None:
        processes = InputParser.generate_random_processes()
    else:
        processes = InputParser.parse_file(input_file)
        if not processes:
            print("\n[오류] 프로세스 로드 실패 또는 파일이 비어있습니다.")
            sys.exit(1)

    InputParser.print_process_summary(processes)

    while True:
        print_algorithm_menu()
        choice = get_user_choice()
        algorithm = MENU[choice]

        quantum = DEFAULT_QUANTUM
        if algorithm in (None, Algorithm.ROUND_ROBIN):
            quantum = ask_quantum()

        if algorithm is None:
            results = run_all_algorithms(processes, quantum)
        else:
            result = run_single_algorithm(algorithm, processes, quantum)
            results = [result] if result else []

        if results:
            save_results(results)

        print("\n" + "="*70)
        continue_choice = input("다른 시뮬레이션을 실행하시겠습니까? (y/n): ").strip().lower()
        if continue_choice != 'y':
            print("\n시뮬레이터를 사용해 주셔서 감사합니다!")
            print("="*70 + "\n")
            break


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(threadName)s] %(levelname)s: %(message)s'
    )
    try:
        main()
    except KeyboardInterrupt:
        print("\n\n사용자에 의해 시뮬레이션이 중단되었습니다.")
        sys.exit(0)
