"""Database, file store and record factories shared by the test suites."""

import tempfile
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Iterator, Tuple
from uuid import uuid4

from sqlalchemy.orm import Session, sessionmaker

from rfi_tracker.core.base import Base
from rfi_tracker.core.database import build_engine
from rfi_tracker.models import (
    AccessRequest,
    Attachment,
    Client,
    Contact,
    EmailLog,
    EmailQueue,
    Project,
    ProjectStakeholder,
    RegistrationToken,
    Response,
    RFI,
    User,
)
from rfi_tracker.storage.file_store import AttachmentFileStore


@contextmanager
def sqlite_session() -> Iterator[Session]:
    """Fresh in-memory database with the full schema and foreign keys enforced."""
    engine = build_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@contextmanager
def workspace() -> Iterator[Tuple[Session, AttachmentFileStore, "RecordFactory"]]:
    """Session, file store and factory for tests that cannot use function fixtures."""
    with tempfile.TemporaryDirectory() as upload_dir, sqlite_session() as session:
        file_store = AttachmentFileStore(upload_dir)
        yield session, file_store, RecordFactory(session, file_store)


class RecordFactory:
    """Creates committed rows (and attachment files) for tests."""

    def __init__(self, db: Session, file_store: AttachmentFileStore):
        self.db = db
        self.file_store = file_store
        self._sequence = 0

    def _next(self) -> int:
        self._sequence += 1
        return self._sequence

    def _save(self, instance):
        self.db.add(instance)
        self.db.commit()
        self.db.refresh(instance)
        return instance

    def user(self, **kwargs) -> User:
        n = self._next()
        values = {
            "email": f"user{n}@example.com",
            "name": f"User {n}",
            "hashed_password": "hashed",
        }
        values.update(kwargs)
        return self._save(User(**values))

    def client(self, **kwargs) -> Client:
        values = {"name": f"Client {self._next()}"}
        values.update(kwargs)
        return self._save(Client(**values))

    def project(self, client: Client, manager: User = None, **kwargs) -> Project:
        n = self._next()
        values = {
            "client_id": client.id,
            "manager_id": manager.id if manager else None,
            "name": f"Project {n}",
            "project_number": f"P{n}",
        }
        values.update(kwargs)
        return self._save(Project(**values))

    def rfi(self, client: Client, created_by: User, project: Project = None, **kwargs) -> RFI:
        n = self._next()
        values = {
            "client_id": client.id,
            "project_id": project.id if project else None,
            "created_by_id": created_by.id,
            "rfi_number": f"{project.project_number if project else 'D'}-{n}",
            "title": f"RFI {n}",
        }
        values.update(kwargs)
        return self._save(RFI(**values))

    def attachment(self, rfi: RFI, with_file: bool = True, **kwargs) -> Attachment:
        filename = kwargs.pop("filename", f"drawing{self._next()}.pdf")
        stored_name = kwargs.pop("stored_name", self.file_store.generate_stored_name(filename))
        if with_file:
            self.file_store.store(stored_name, b"%PDF-1.4 test content")
        return self._save(Attachment(
            rfi_id=rfi.id, filename=filename, stored_name=stored_name, size=21, **kwargs
        ))

    def response(self, rfi: RFI, author: User = None, **kwargs) -> Response:
        values = {"rfi_id": rfi.id, "author_id": author.id if author else None, "content": "Answer"}
        values.update(kwargs)
        return self._save(Response(**values))

    def email_log(self, rfi: RFI, **kwargs) -> EmailLog:
        return self._save(EmailLog(rfi_id=rfi.id, recipient="site@example.com", **kwargs))

    def email_queue(self, rfi: RFI, **kwargs) -> EmailQueue:
        return self._save(EmailQueue(rfi_id=rfi.id, recipient="site@example.com", **kwargs))

    def contact(self, client: Client, **kwargs) -> Contact:
        n = self._next()
        values = {"client_id": client.id, "name": f"Contact {n}", "email": f"contact{n}@example.com"}
        values.update(kwargs)
        return self._save(Contact(**values))

    def stakeholder(self, project: Project, contact: Contact, added_by: User = None) -> ProjectStakeholder:
        return self._save(ProjectStakeholder(
            project_id=project.id,
            contact_id=contact.id,
            added_by_id=added_by.id if added_by else None,
        ))

    def access_request(self, project: Project, contact: Contact = None, **kwargs) -> AccessRequest:
        return self._save(AccessRequest(
            project_id=project.id, contact_id=contact.id if contact else None, **kwargs
        ))

    def registration_token(self, contact: Contact) -> RegistrationToken:
        return self._save(RegistrationToken(
            token=uuid4().hex,
            email=contact.email,
            contact_id=contact.id,
            expires_at=datetime.utcnow() + timedelta(days=7),
        ))

    def rfi_tree(self, client: Client, created_by: User, project: Project = None, attachments: int = 1) -> RFI:
        """RFI with attachments (files on disk), a response, an email log and a queued email."""
        rfi = self.rfi(client, created_by, project)
        for _ in range(attachments):
            self.attachment(rfi)
        self.response(rfi, created_by)
        self.email_log(rfi)
        self.email_queue(rfi)
        return rfi

