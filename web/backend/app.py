"""
CPU 스케줄링 스텝 시뮬레이터 - FastAPI 백엔드
"""

import asyncio
import logging
from dataclasses import asdict
from typing import List, Optional, Dict, Any

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError

from core.errors import SimulationError
from core.process import Process
from simulation import Algorithm, ALGORITHMS, SimulationSession, run_algorithm

logger = logging.getLogger(__name__)

app = FastAPI(
    title="CPU Scheduling Step Simulator",
    description="스텝 단위로 재생 가능한 CPU 스케줄링 시뮬레이터",
    version="1.0.0"
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Pydantic 모델
class ProcessInput(BaseModel):
    name: str = Field(min_length=1)
    arrival_time: int = Field(ge=0)
    burst_time: int = Field(gt=0)
    priority: int = Field(default=1, ge=1)
    pid: Optional[int] = None


class SimulationRequest(BaseModel):
    processes: List[ProcessInput]
    algorithm: str
    # 잘못된 값은 엔진에서 기본값 2로 대체
    quantum: Optional[Any] = None


class CompareRequest(BaseModel):
    processes: List[ProcessInput]
    algorithms: List[str] = Field(default_factory=lambda: [a.value for a in Algorithm])
    quantum: Optional[Any] = None


def create_process_objects(process_inputs: List[ProcessInput]) -> List[Process]:
    """ProcessInput을 Process 객체로 변환 (PID가 없으면 순서대로 할당)"""
    return [
        Process(
            pid=p.pid if p.pid is not None else index,
            name=p.name.strip(),
            arrival_time=p.arrival_time,
            burst_time=p.burst_time,
            priority=p.priority
        )
        for index, p in enumerate(process_inputs, 1)
    ]


def serialize_result(result: Dict) -> Dict:
    """결과 딕셔너리를 JSON 응답 형태로 변환"""
    return {
        'algorithm': result['algorithm'],
        'steps': result['steps'].to_list(),
        'gantt_chart': [asdict(entry) for entry in result['gantt_chart']],
        'processes': [p.to_dict() for p in result['processes']],
        'statistics': result['statistics']
    }


@app.get("/")
async def root():
    return {"message": "CPU Scheduling Step Simulator API", "version": "1.0.0"}


@app.get("/algorithms")
async def get_algorithms():
    """사용 가능한 알고리즘 목록 반환"""
    return {
        "algorithms": [
            {"id": algorithm.value, "name": info['name'], "preemptive": info['preemptive']}
            for algorithm, info in ALGORITHMS.items()
        ]
    }


@app.post("/simulate")
async def simulate(request: SimulationRequest):
    """단일 알고리즘 시뮬레이션 실행"""
    try:
        processes = create_process_objects(request.processes)
        result = run_algorithm(request.algorithm, processes, request.quantum)
    except SimulationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"success": True, "result": serialize_result(result)}


@app.post("/simulate/compare")
async def compare_algorithms(request: CompareRequest):
    """여러 알고리즘 비교 시뮬레이션"""
    results = []
    comparison = {
        'algorithms': [],
        'avg_waiting_time': [],
        'avg_turnaround_time': [],
        'avg_response_time': [],
        'cpu_utilization': [],
        'context_switches': []
    }

    try:
        for algorithm in request.algorithms:
            processes = create_process_objects(request.processes)
            result = run_algorithm(algorithm, processes, request.quantum)
            results.append(serialize_result(result))

            stats = result['statistics']
            comparison['algorithms'].append(result['algorithm'])
            for key in ('avg_waiting_time', 'avg_turnaround_time', 'avg_response_time',
                        'cpu_utilization', 'context_switches'):
                comparison[key].append(stats[key])
    except SimulationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"success": True, "results": results, "comparison": comparison}


@app.get("/sample-processes")
async def get_sample_processes():
    """샘플 프로세스 데이터 반환"""
    return {
        "samples": [
            {
                "name": "Basic (2 processes)",
                "processes": [
                    {"name": "P1", "arrival_time": 0, "burst_time": 5, "priority": 2},
                    {"name": "P2", "arrival_time": 1, "burst_time": 3, "priority": 1}
                ]
            },
            {
                "name": "Preemption (3 processes)",
                "processes": [
                    {"name": "P1", "arrival_time": 0, "burst_time": 6, "priority": 3},
                    {"name": "P2", "arrival_time": 2, "burst_time": 3, "priority": 1},
                    {"name": "P3", "arrival_time": 4, "burst_time": 2, "priority": 2}
                ]
            },
            {
                "name": "Idle gap (3 processes)",
                "processes": [
                    {"name": "P1", "arrival_time": 2, "burst_time": 3, "priority": 1},
                    {"name": "P2", "arrival_time": 3, "burst_time": 2, "priority": 2},
                    {"name": "P3", "arrival_time": 12, "burst_time": 4, "priority": 1}
                ]
            }
        ]
    }


class ReplayConnection:
    """WebSocket 연결 하나에 대한 재생 상태"""

    def __init__(self, websocket: WebSocket):
        self.websocket = websocket
        self.session: Optional[SimulationSession] = None
        self.player: Optional[asyncio.Task] = None

    async def send_step(self):
        await self.websocket.send_json({
            'type': 'step',
            'index': self.session.current_index,
            'total': len(self.session.steps),
            'step': self.session.current_step().to_dict()
        })

    async def play(self, delay: float):
        """자동 재생: 마지막 스텝까지 delay 간격으로 전송"""
        while not self.session.is_at_end():
            await asyncio.sleep(delay)
            self.session.next_step()
            await self.send_step()
        await self.websocket.send_json({'type': 'finished', 'index': self.session.current_index})

    async def stop(self):
        if self.player is not None and not self.player.done():
            self.player.cancel()
            try:
                await self.player
            except asyncio.CancelledError:
                pass
        self.player = None

    async def handle(self, message: Dict):
        action = message.get('action')

        if action == 'init':
            await self.stop()
            request = SimulationRequest.model_validate(message)
            self.session = SimulationSession(create_process_objects(request.processes),
                                             request.algorithm, request.quantum)
            self.session.start()
            await self.websocket.send_json({
                'type': 'initialized',
                'algorithm': self.session.algorithm.value,
                'total': len(self.session.steps)
            })
            await self.send_step()
            return

        if self.session is None or not self.session.started:
            await self.websocket.send_json({'type': 'error', 'message': 'Simulation not initialized'})
            return

        if action == 'stop':
            await self.stop()
            await self.websocket.send_json({'type': 'stopped', 'index': self.session.current_index})
            return

        # 수동 이동 전에는 자동 재생을 멈춘다
        await self.stop()
        if action == 'next':
            self.session.next_step()
        elif action == 'previous':
            self.session.previous_step()
        elif action == 'jump':
            self.session.jump_to(int(message.get('index', 0)))
        elif action == 'reset':
            self.session.rewind()
        elif action == 'play':
            speed = float(message.get('speed', 1.0)) or 1.0
            self.player = asyncio.create_task(self.play(1.0 / speed))
            return
        else:
            await self.websocket.send_json({'type': 'error', 'message': f'Unknown action: {action}'})
            return

        await self.send_step()


@app.websocket("/ws/replay")
async def websocket_replay(websocket: WebSocket):
    """스텝 로그 재생 WebSocket 엔드포인트"""
    await websocket.accept()
    connection = ReplayConnection(websocket)

    try:
        while True:
            message = await websocket.receive_json()
            try:
                await connection.handle(message)
            except (SimulationError, ValidationError, IndexError, ValueError) as e:
                await websocket.send_json({'type': 'error', 'message': str(e)})
    except WebSocketDisconnect:
        logger.debug("Replay client disconnected")
    finally:
        await connection.stop()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
