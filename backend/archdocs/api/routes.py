import logging

from fastapi import APIRouter, Depends, HTTPException

from archdocs.errors import (
    DiagramNotFoundError,
    InvalidInputError,
    StoreInconsistencyError,
)
from archdocs.pipeline.controller import PipelineController
from archdocs.schemas import DiagramListResponse, GenerateRequest, GenerateResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects/{project_id}/c4-diagrams", tags=["c4-diagrams"])


def get_controller() -> PipelineController:
    return PipelineController()


def _store_failure(e: StoreInconsistencyError) -> HTTPException:
    logger.error("Store inconsistency: %s", e)
    return HTTPException(
        status_code=500,
        detail={"error": "store_inconsistency", "diagramId": e.diagram_id, "reason": e.reason},
    )


@router.post("", response_model=GenerateResponse, response_model_by_alias=True)
def generate_diagrams(
    project_id: str,
    request: GenerateRequest,
    controller: PipelineController = Depends(get_controller),
):
    try:
        context = controller.build(
            project_id,
            request.requirements,
            request.system_name,
            request.system_description,
        )
        controller.save(context)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreInconsistencyError as e:
        raise _store_failure(e)

    return GenerateResponse(
        project_id=project_id,
        used_fallback=context.used_fallback,
        diagrams=context.diagrams,
    )


@router.get("", response_model=DiagramListResponse, response_model_by_alias=True)
def list_diagrams(
    project_id: str,
    controller: PipelineController = Depends(get_controller),
):
    try:
        entries = controller.list(project_id)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreInconsistencyError as e:
        raise _store_failure(e)

    return DiagramListResponse(project_id=project_id, diagrams=entries)


@router.get("/{diagram_id}")
def get_diagram(
    project_id: str,
    diagram_id: str,
    controller: PipelineController = Depends(get_controller),
):
    try:
        diagram = controller.get(project_id, diagram_id)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DiagramNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreInconsistencyError as e:
        raise _store_failure(e)

    return diagram.model_dump(by_alias=True)
