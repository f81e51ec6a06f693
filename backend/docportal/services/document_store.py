import builtins
import logging
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from docportal.config import Settings
from docportal.database import get_engine, get_session_factory, init_db
from docportal.exceptions import (
    IndexReadError,
    IndexWriteError,
    NotFoundError,
    StorageDeleteError,
    StorageReadError,
    StorageWriteError,
)
from docportal.models.document import Document
from docportal.utils.filesystem import ensure_data_dirs, generate_stored_name, remove_file

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class DocumentStore:
    """Owns the document index (SQL table) and the blob directory.

    Blobs are written before their record and removed before their record.
    A failed index write after a successful blob write removes the blob
    again; a failed blob removal on delete is logged and the record is
    deleted anyway.
    """

    def __init__(self, session_factory: sessionmaker, upload_dir: Path, engine: Engine | None = None):
        self._session_factory = session_factory
        self.upload_dir = upload_dir
        self._engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentStore":
        ensure_data_dirs(settings.data_dir, settings.upload_dir)
        init_db(settings.db_path)
        engine = get_engine(settings.db_path)
        logger.info("Document store ready at %s", settings.data_dir)
        return cls(get_session_factory(engine), settings.upload_dir, engine=engine)

    def close(self):
        if self._engine is not None:
            self._engine.dispose()

    def create(
        self,
        original_name: str,
        content: bytes,
        size: int | None = None,
        content_type: str | None = None,
    ) -> Document:
        stored_name = generate_stored_name(original_name)
        blob = self.upload_dir / stored_name
        try:
            # "x" refuses to overwrite an existing blob
            f = blob.open("xb")
        except OSError as exc:
            raise StorageWriteError(f"Failed to write {original_name!r} to storage: {exc}") from exc
        try:
            with f:
                f.write(content)
        except OSError as exc:
            # open() created this blob, so removing it cannot touch another document
            self._discard_blob(blob)
            raise StorageWriteError(f"Failed to write {original_name!r} to storage: {exc}") from exc

        doc = Document(
            filename=original_name,
            filepath=stored_name,
            filesize=len(content) if size is None else size,
            content_type=content_type,
            created_at=_utc_now(),
        )
        try:
            with self._session_factory() as db:
                db.add(doc)
                db.commit()
                db.refresh(doc)
        except SQLAlchemyError as exc:
            self._discard_blob(blob)
            raise IndexWriteError(f"Failed to record {original_name!r}: {exc}") from exc

        logger.debug("Stored document %s as %s (%d bytes)", doc.id, stored_name, doc.filesize)
        return doc

    def list(self) -> builtins.list[Document]:
        try:
            with self._session_factory() as db:
                return db.query(Document).order_by(Document.id.desc()).all()
        except SQLAlchemyError as exc:
            raise IndexReadError(str(exc)) from exc

    def get(self, doc_id: int) -> Document:
        try:
            with self._session_factory() as db:
                doc = db.query(Document).filter(Document.id == doc_id).first()
        except SQLAlchemyError as exc:
            raise IndexReadError(str(exc)) from exc
        if doc is None:
            raise NotFoundError()
        return doc

    def delete(self, doc_id: int) -> None:
        with self._session_factory() as db:
            try:
                doc = db.query(Document).filter(Document.id == doc_id).first()
            except SQLAlchemyError as exc:
                raise IndexReadError(str(exc)) from exc
            if doc is None:
                raise NotFoundError()

            try:
                if not remove_file(self.upload_dir / doc.filepath):
                    logger.warning("Blob %s for document %s was already missing", doc.filepath, doc_id)
            except OSError as exc:
                err = StorageDeleteError(f"Failed to delete {doc.filepath} from disk: {exc}")
                logger.error("%s; removing record %s anyway", err, doc_id)

            try:
                db.delete(doc)
                db.commit()
            except SQLAlchemyError as exc:
                raise IndexWriteError(str(exc)) from exc

    def blob_path(self, doc: Document) -> Path:
        path = self.upload_dir / doc.filepath
        if not path.is_file():
            raise StorageReadError()
        return path

    def _discard_blob(self, blob: Path):
        try:
            remove_file(blob)
        except OSError as exc:
            logger.error("Could not remove orphaned blob %s: %s", blob, exc)
