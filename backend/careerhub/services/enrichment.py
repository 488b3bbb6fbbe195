"""
AI 面试准备补全流程

每条记录一个独立的状态机：
    IDLE --start()--> PENDING --成功/失败--> IDLE

规则：
1. 同一条记录同时最多只有一个未完成的请求，重复请求直接拒绝
2. 不同记录的请求互不影响，可以并发进行
3. 成功时只合并 ai_prep 字段，合并基于记录在完成时刻的最新状态
4. 失败或超时时保留原有 ai_prep，以 EnrichmentError 报告给调用方，不自动重试
5. 请求期间记录被删除：取消外部调用，结果静默丢弃，不会复活记录
"""

import asyncio
from enum import Enum
from typing import Callable, Dict, List, Optional, Set

from careerhub.agent.llm_factory import get_prep_timeout
from careerhub.agent.prep_generator import InterviewPrepGenerator
from careerhub.models.schemas import JobRecord
from careerhub.services.errors import EnrichmentError, EnrichmentInProgressError
from careerhub.services.job_service import JobService, Snapshot

StateListener = Callable[[str, "EnrichmentState"], None]


class EnrichmentState(str, Enum):
    """单条记录的补全状态"""
    IDLE = "idle"
    PENDING = "pending"


class EnrichmentWorkflow:
    """
    面试准备补全流程

    使用示例：
        workflow = EnrichmentWorkflow(service, InterviewPrepGenerator())
        record = await workflow.enrich(job.id)      # 发起并等待
        task = workflow.start(other.id)             # 只发起，不等待
        workflow.state(other.id)                    # EnrichmentState.PENDING
    """

    def __init__(
        self,
        service: JobService,
        generator: Optional[InterviewPrepGenerator] = None,
        timeout: Optional[float] = None
    ):
        """
        初始化流程，并订阅 service 的快照以感知记录删除

        Args:
            service: 求职记录服务，结果通过它写回
            generator: 补全协作方，需要提供 async generate(role, company)
            timeout: 单次请求超时秒数，为 None 时读取 llm_config.json
        """
        self.service = service
        self.generator = generator or InterviewPrepGenerator()
        self.timeout = timeout if timeout is not None else get_prep_timeout()

        # 进行中的流程任务（按记录 ID）
        self._tasks: Dict[str, asyncio.Task] = {}
        # 进行中的外部调用（按记录 ID），记录被删除时取消
        self._calls: Dict[str, asyncio.Future] = {}
        # 因记录删除而被取消的记录 ID
        self._superseded: Set[str] = set()
        self._listeners: List[StateListener] = []

        self._unsubscribe = service.subscribe(self._on_snapshot)

    # ==================== 状态查询 ====================

    def state(self, job_id: str) -> EnrichmentState:
        """获取单条记录的补全状态"""
        return EnrichmentState.PENDING if job_id in self._tasks else EnrichmentState.IDLE

    def is_pending(self, job_id: str) -> bool:
        return job_id in self._tasks

    def pending_ids(self) -> List[str]:
        """所有正在生成中的记录 ID"""
        return list(self._tasks)

    def states(self) -> Dict[str, EnrichmentState]:
        """当前快照中每条记录的补全状态"""
        return {record.id: self.state(record.id) for record in self.service.snapshot()}

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        订阅补全状态变化，回调参数为 (job_id, state)

        Returns:
            取消订阅的函数
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """停止监听 service 快照"""
        self._unsubscribe()

    # ==================== 发起请求 ====================

    def start(self, job_id: str) -> asyncio.Task:
        """
        发起补全请求（IDLE -> PENDING），必须在事件循环中调用

        Returns:
            asyncio.Task，结果为更新后的 JobRecord；记录在请求期间被删除时为 None

        Raises:
            EnrichmentInProgressError: 该记录已有未完成的请求
            NotFoundError: 记录不存在
        """
        if job_id in self._tasks:
            print(f"[EnrichmentWorkflow] 记录 {job_id} 已在生成中，拒绝重复请求")
            raise EnrichmentInProgressError(job_id)

        record = self.service.get(job_id)
        task = asyncio.get_running_loop().create_task(self._run(record))
        self._tasks[job_id] = task
        task.add_done_callback(lambda done: self._on_done(job_id, done))
        print(f"[EnrichmentWorkflow] 开始生成面试准备: {record.role} @ {record.company} (ID: {job_id})")
        self._emit(job_id, EnrichmentState.PENDING)
        return task

    async def enrich(self, job_id: str) -> Optional[JobRecord]:
        """
        发起补全请求并等待结果

        Returns:
            更新后的 JobRecord；记录在请求期间被删除时返回 None

        Raises:
            EnrichmentInProgressError: 该记录已有未完成的请求
            NotFoundError: 记录不存在
            EnrichmentError: 生成失败或超时
        """
        return await self.start(job_id)

    # ==================== 内部流程 ====================

    async def _run(self, record: JobRecord) -> Optional[JobRecord]:
        job_id = record.id
        try:
            # 任务开始执行前记录可能已被删除
            if job_id in self._superseded or self.service.store.find(job_id) is None:
                print(f"[EnrichmentWorkflow] 记录 {job_id} 已删除，跳过生成")
                return None

            text = await self._call_generator(record)
            if text is None:
                return None

            # 先回到 IDLE，再写回结果并通知订阅者
            self._release(job_id)
            return self.service.save_prep(job_id, text)
        finally:
            self._release(job_id)

    async def _call_generator(self, record: JobRecord) -> Optional[str]:
        """调用补全协作方，返回裁剪后的文本；记录被删除时返回 None"""
        job_id = record.id
        call = asyncio.ensure_future(
            asyncio.wait_for(
                self.generator.generate(record.role, record.company),
                timeout=self.timeout
            )
        )
        self._calls[job_id] = call
        try:
            raw = await call
        except asyncio.CancelledError:
            if call.cancelled() and job_id in self._superseded:
                print(f"[EnrichmentWorkflow] 记录 {job_id} 已删除，取消生成")
                return None
            raise
        except asyncio.TimeoutError as e:
            print(f"[EnrichmentWorkflow Error] 记录 {job_id} 生成超时 ({self.timeout}s)")
            raise EnrichmentError(job_id, f"面试准备生成超时（{self.timeout} 秒）") from e
        except Exception as e:
            print(f"[EnrichmentWorkflow Error] 记录 {job_id} 生成失败: {e}")
            raise EnrichmentError(job_id, f"面试准备生成失败: {e}") from e
        finally:
            self._calls.pop(job_id, None)

        text = (raw or "").strip()
        if not text:
            print(f"[EnrichmentWorkflow Error] 记录 {job_id} 返回内容为空")
            raise EnrichmentError(job_id, "面试准备生成结果为空")
        return text

    def _release(self, job_id: str) -> None:
        """PENDING -> IDLE（只释放当前任务自己的占用）"""
        task = self._tasks.get(job_id)
        if task is not None and task is asyncio.current_task():
            del self._tasks[job_id]
            self._superseded.discard(job_id)
            self._emit(job_id, EnrichmentState.IDLE)

    def _on_snapshot(self, snapshot: Snapshot) -> None:
        """记录从快照中消失时，取消对应的外部调用"""
        live_ids = {record.id for record in snapshot}
        for job_id in list(self._tasks):
            if job_id in live_ids or job_id in self._superseded:
                continue
            self._superseded.add(job_id)
            call = self._calls.get(job_id)
            if call is not None and not call.done():
                call.cancel()

    def _on_done(self, job_id: str, task: asyncio.Task) -> None:
        # 任务在开始执行前就被外部取消时，_run 的 finally 不会执行
        if self._tasks.get(job_id) is task:
            del self._tasks[job_id]
            self._superseded.discard(job_id)
            self._emit(job_id, EnrichmentState.IDLE)

        if task.cancelled():
            return
        # 取出异常，任务可能无人等待
        error = task.exception()
        if error is not None:
            print(f"[EnrichmentWorkflow] 请求结束（失败）: {error}")

    def _emit(self, job_id: str, state: EnrichmentState) -> None:
        for listener in list(self._listeners):
            listener(job_id, state)
