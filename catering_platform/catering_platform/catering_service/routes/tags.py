from fastapi import APIRouter, Depends, status

from ..auth import require_auth
from ..deps import PageParams, get_page_params, get_tag_service
from ..schemas import MessageResponse, TagCreate, TagListResponse, TagOut, TagUpdate
from ..services.tag_service import TagService

router = APIRouter(prefix="/tags", tags=["tags"], dependencies=[Depends(require_auth)])


@router.get("", response_model=TagListResponse)
def list_tags(
    pagination: PageParams = Depends(get_page_params),
    service: TagService = Depends(get_tag_service)
):
    items, meta = service.list(pagination.page, pagination.per_page)
    return {"tags": items, "pagination": meta}


@router.get("/{tag_id}", response_model=TagOut)
def get_tag(tag_id: int, service: TagService = Depends(get_tag_service)):
    return service.get(tag_id)


@router.post("", response_model=TagOut, status_code=status.HTTP_201_CREATED)
def create_tag(payload: TagCreate, service: TagService = Depends(get_tag_service)):
    return service.create(payload)


@router.put("/{tag_id}", response_model=TagOut)
@router.patch("/{tag_id}", response_model=TagOut)
def update_tag(tag_id: int, payload: TagUpdate, service: TagService = Depends(get_tag_service)):
    return service.update(tag_id, payload)


@router.delete("/{tag_id}", response_model=MessageResponse)
def delete_tag(tag_id: int, service: TagService = Depends(get_tag_service)):
    service.delete(tag_id)
    return {"message": f"Tag with ID {tag_id} successfully deleted."}
