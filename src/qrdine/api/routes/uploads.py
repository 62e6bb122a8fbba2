from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile, status

from qrdine.api.security import Principal, require_admin
from qrdine.application.dto.responses import UploadResponse
from qrdine.application.use_cases.upload_image import UploadImage
from qrdine.infrastructure.storage.catbox import CatboxImageHost

router = APIRouter(tags=["uploads"])


def _upload_image_use_case() -> UploadImage:
    return UploadImage(image_host=CatboxImageHost())


@router.post(
    "/v1/uploads",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
)
def upload_image(
    file: UploadFile = File(...),
    _: Principal = Depends(require_admin),
) -> UploadResponse:
    return _upload_image_use_case().execute(
        filename=file.filename or "upload",
        content=file.file.read(),
        content_type=file.content_type,
    )
