from fastapi import APIRouter, Depends
from typing import Dict, Any
import logging

from ..core.remote_client import RemoteTaskClient
from ..dependencies import get_task_client, require_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tasks"], dependencies=[Depends(require_session)])

@router.post("/complete/{task_id}", response_model=Dict[str, Any])
async def complete_task(
    task_id: str,
    client: RemoteTaskClient = Depends(get_task_client)
):
    """
    Отметить задачу выполненной в удаленном сервисе

    Ошибка удаленного сервиса не перехватывается здесь и превращается
    в 502 обработчиком UpstreamError.
    """
    logger.info(f"clicked {task_id}")
    await client.mark_task_done(task_id)

    return {
        "success": True,
        "task_id": task_id
    }
