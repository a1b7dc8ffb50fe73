"""
시각화 모듈: 스텝 출력, Gantt Chart 및 통계 그래프 생성
"""

import logging
from typing import List, Dict, Optional

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from core.statistics import GanttEntry, IDLE_PID
from core.step_log import Step

logger = logging.getLogger(__name__)


class Visualizer:
    """스케줄링 결과 시각화"""

    def __init__(self):
        # 프로세스별 색상 설정
        self.colors = plt.cm.Set3.colors
        self.idle_color = '#CCCCCC'

    @staticmethod
    def format_step(step: Step, index: int, total: int) -> str:
        """
        스텝 하나를 표 형식 문자열로 변환

        Args:
            step: 출력할 스텝
            index: 스텝 인덱스 (0부터)
            total: 전체 스텝 수
        """
        lines = [
            "-"*70,
            f"Step {index + 1}/{total}   t={step.time}   [{step.event.value}]",
            step.description,
            "-"*70,
            f"{'이름':<12} {'도착':>6} {'실행':>6} {'남은':>6} {'우선순위':>8}  상태",
        ]
        for p in sorted(step.processes, key=lambda s: s.name):
            lines.append(f"{p.name:<12} {p.arrival_time:>6} {p.burst_time:>6} "
                         f"{p.remaining_time:>6} {p.priority:>8}  {p.state.value}")
        return "\n".join(lines)

    def draw_gantt_chart(self, gantt_data: List[GanttEntry], algorithm_name: str,
                         save_path: Optional[str] = None, show: bool = False):
        """
        Gantt Chart 그리기

        Args:
            gantt_data: Gantt Chart 데이터
            algorithm_name: 알고리즘 이름
            save_path: 저장 경로 (None이면 저장 안 함)
            show: 화면에 표시할지 여부
        """
        if not gantt_data:
            logger.warning("No Gantt chart data for %s", algorithm_name)
            return

        fig, ax = plt.subplots(figsize=(14, 5))

        # 프로세스 ID 추출 (유일한 값만)
        unique_pids = sorted(set(entry.pid for entry in gantt_data if entry.pid != IDLE_PID))
        pid_to_y = {pid: idx for idx, pid in enumerate(unique_pids)}
        pid_to_name = {entry.pid: entry.name for entry in gantt_data}

        for entry in gantt_data:
            if entry.pid == IDLE_PID:
                # CPU 유휴 시간
                ax.axvspan(entry.start_time, entry.end_time, color=self.idle_color, alpha=0.3)
                continue

            duration = entry.end_time - entry.start_time
            y_pos = pid_to_y[entry.pid]
            color = self.colors[entry.pid % len(self.colors)]

            ax.barh(y_pos, duration, left=entry.start_time, height=0.8,
                    color=color, edgecolor='black', linewidth=0.5)

            if duration > 1:
                ax.text(entry.start_time + duration / 2, y_pos, entry.name,
                        ha='center', va='center', fontsize=8, fontweight='bold')

        ax.set_yticks(range(len(unique_pids)))
        ax.set_yticklabels([pid_to_name[pid] for pid in unique_pids])
        ax.set_xlabel('Time', fontsize=12)
        ax.set_ylabel('Process', fontsize=12)
        ax.set_title(f'Gantt Chart - {algorithm_name}', fontsize=14, fontweight='bold')
        ax.grid(axis='x', alpha=0.3)

        legend_elements = [
            mpatches.Patch(color=self.colors[0], label='Running'),
            mpatches.Patch(color=self.idle_color, alpha=0.3, label='Idle')
        ]
        ax.legend(handles=legend_elements, loc='upper right')

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            logger.info("Gantt chart saved to %s", save_path)

        if show:
            plt.show()
        else:
            plt.close(fig)

    def compare_algorithms(self, results: List[Dict], save_path: Optional[str] = None,
                           show: bool = False):
        """
        여러 알고리즘의 성능 비교 그래프

        Args:
            results: 각 알고리즘의 결과 리스트
            save_path: 저장 경로
            show: 화면에 표시할지 여부
        """
        if not results:
            logger.warning("No results to compare")
            return

        algorithms = [r['algorithm'] for r in results]
        metrics = [
            ('avg_waiting_time', 'Average Waiting Time', 'skyblue'),
            ('avg_turnaround_time', 'Average Turnaround Time', 'lightcoral'),
            ('avg_response_time', 'Average Response Time', 'lightgreen'),
            ('context_switches', 'Context Switches', 'plum'),
        ]

        fig, axes = plt.subplots(2, 2, figsize=(14, 10))
        fig.suptitle('Scheduling Algorithms Performance Comparison',
                     fontsize=16, fontweight='bold')

        for ax, (key, label, color) in zip(axes.flat, metrics):
            values = [r['statistics'][key] for r in results]
            bars = ax.bar(range(len(algorithms)), values, color=color, edgecolor='black')
            ax.set_xticks(range(len(algorithms)))
            ax.set_xticklabels(algorithms, rotation=30, ha='right', fontsize=9)
            ax.set_ylabel(label, fontsize=11)
            ax.set_title(f'{label} Comparison', fontsize=12, fontweight='bold')
            ax.grid(axis='y', alpha=0.3)

            # 값 표시
            for bar, value in zip(bars, values):
                ax.text(bar.get_x() + bar.get_width() / 2., bar.get_height(),
                        f'{value:.2f}', ha='center', va='bottom', fontsize=9)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            logger.info("Comparison chart saved to %s", save_path)

        if show:
            plt.show()
        else:
            plt.close(fig)

    def print_statistics_table(self, results: List[Dict]):
        """
        통계를 표 형식으로 출력

        Args:
            results: 각 알고리즘의 결과 리스트
        """
        print("\n" + "="*100)
        print("스케줄링 알고리즘 성능 비교")
        print("="*100)
        print(f"{'알고리즘':<15} {'평균 대기':>12} {'평균 반환':>12} {'평균 응답':>12} "
              f"{'CPU 이용률(%)':>15} {'문맥전환':>10} {'종료 시각':>10}")
        print("-"*100)

        for result in results:
            stats = result['statistics']
            print(f"{result['algorithm']:<15} "
                  f"{stats['avg_waiting_time']:>12.2f} "
                  f"{stats['avg_turnaround_time']:>12.2f} "
                  f"{stats['avg_response_time']:>12.2f} "
                  f"{stats['cpu_utilization']:>15.2f} "
                  f"{stats['context_switches']:>10} "
                  f"{stats['total_time']:>10}")

        print("="*100 + "\n")

    def print_process_details(self, result: Dict):
        """
        개별 프로세스의 상세 정보 출력

        Args:
            result: 알고리즘 실행 결과
        """
        print(f"\n{'='*80}")
        print(f"프로세스 상세 - {result['algorithm']}")
        print(f"{'='*80}")
        print(f"{'이름':<10} {'도착':>6} {'실행':>6} {'우선순위':>8} {'시작':>6} {'종료':>6} "
              f"{'대기':>6} {'반환':>6} {'응답':>6}")
        print(f"{'-'*80}")

        for p in result['processes']:
            print(f"{p.name:<10} {p.arrival_time:>6} {p.burst_time:>6} {p.priority:>8} "
                  f"{p.start_time:>6} {p.finish_time:>6} {p.waiting_time:>6} "
                  f"{p.turnaround_time:>6} {p.response_time:>6}")

        print(f"{'='*80}\n")
