from fastapi import APIRouter, Depends, File, Form, UploadFile

from tablemenu.api.deps import AuthSession, require_admin
from tablemenu.core.config import settings
from tablemenu.schemas.common import Envelope, envelope
from tablemenu.schemas.images import ImageAuthOut, ImageUploadOut
from tablemenu.services.image_host import ImageHostAdapter, check_upload, get_image_host, read_upload

router = APIRouter()


@router.post("", response_model=Envelope[ImageUploadOut], status_code=201)
def upload_image(
    file: UploadFile = File(...),
    folder: str | None = Form(default=None),
    host: ImageHostAdapter = Depends(get_image_host),
    _: AuthSession = Depends(require_admin),
):
    content = read_upload(file.file)
    filename = check_upload(file.filename, content)
    uploaded = host.upload(content, filename, (folder or "").strip() or settings.IMAGEKIT_DEFAULT_FOLDER)
    return envelope(
        ImageUploadOut(url=uploaded.url, file_id=uploaded.file_id, name=uploaded.name, path=uploaded.path)
    )


@router.get("/auth", response_model=Envelope[ImageAuthOut])
def upload_auth(
    host: ImageHostAdapter = Depends(get_image_host),
    _: AuthSession = Depends(require_admin),
):
    auth = host.upload_auth()
    return envelope(
        ImageAuthOut(
            token=auth.token,
            expire=auth.expire,
            signature=auth.signature,
            public_key=auth.public_key,
            url_endpoint=auth.url_endpoint,
        )
    )
