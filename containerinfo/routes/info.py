import logging

from fastapi import APIRouter, HTTPException, Response

from ..snapshot import SnapshotBuilder, SnapshotError

log = logging.getLogger(__name__)
router = APIRouter()

# One builder per process so the CPU sampler keeps its baseline between requests.
_builder = SnapshotBuilder()


def get_builder() -> SnapshotBuilder:
    return _builder


@router.get("/container")
def container_info():
    try:
        body = get_builder().render()
    except SnapshotError as e:
        log.exception("Container info failed")
        raise HTTPException(status_code=500, detail=str(e))
    return Response(content=body, media_type="application/json")
