# app/services/registry.py
"""
Registro de certificados: a máquina de estados.

Cada operação pública roda inteira sob ``self._lock`` e dentro de uma única
transação. Todas as pré-condições são checadas antes da primeira escrita;
qualquer exceção faz rollback, então uma falha nunca deixa estado parcial.

Papéis:
  - owner: gerencia issuers e a própria troca de owner
  - issuer autorizado: emite, revoga e transfere certificados
  - qualquer um: leitura/verificação
"""
from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, NamedTuple, Optional

import structlog
from sqlalchemy import select, func
from sqlalchemy.orm import Session, sessionmaker

from app.core.errors import (
    AlreadyAuthorized,
    AlreadyRevoked,
    CannotRevokeOwner,
    DuplicateCertificate,
    InvalidInput,
    InvalidState,
    NotAuthorized,
    NotFound,
    RegistryError,
    Unauthorized,
)
from app.core.identity import ZERO_IDENTITY, normalize_identity
from app.models.certificate import Certificate
from app.models.event import RegistryEvent
from app.models.issuer import Issuer, IssuerCertificate
from app.models.registry_state import RegistryState
from app.services.certificate_id import compute_certificate_id

logger = structlog.get_logger(__name__)

# nomes de evento (não mudar: consumidores externos fazem replay por nome)
CERTIFICATE_ISSUED = "CertificateIssued"
CERTIFICATE_REVOKED = "CertificateRevoked"
ISSUER_AUTHORIZED = "IssuerAuthorized"
ISSUER_REVOKED = "IssuerRevoked"
OWNERSHIP_TRANSFERRED = "OwnershipTransferred"

# evento persistido -> nome da linha de log
_LOG_NAMES = {
    CERTIFICATE_ISSUED: "certificate_issued",
    CERTIFICATE_REVOKED: "certificate_revoked",
    ISSUER_AUTHORIZED: "issuer_authorized",
    ISSUER_REVOKED: "issuer_revoked",
    OWNERSHIP_TRANSFERRED: "ownership_transferred",
}

_STATE_ID = 1


class Verification(NamedTuple):
    is_valid: bool
    recipient_name: str
    course_name: str
    issuing_institution: str
    issue_date: int


NOT_FOUND_VERIFICATION = Verification(False, "", "", "", 0)


class Issuance(NamedTuple):
    certificate_id: str
    issue_date: int


def _unix_now() -> int:
    return int(time.time())


def _require_text(**fields: str) -> None:
    for name, value in fields.items():
        if not isinstance(value, str) or value == "":
            raise InvalidInput(f"{name} must not be empty.", field=name)


class CertificateRegistry:
    def __init__(self, session_factory: sessionmaker, *, clock: Optional[Callable[[], int]] = None) -> None:
        self.session_factory = session_factory
        self._clock = clock or _unix_now
        self._lock = threading.RLock()

    # ------------------------------------------------------------------ #
    # infraestrutura
    # ------------------------------------------------------------------ #

    @contextmanager
    def _tx(self, op: str) -> Iterator[Session]:
        with self._lock:
            db = self.session_factory()
            try:
                yield db
                db.commit()
            except RegistryError as exc:
                db.rollback()
                logger.warning("registry_operation_rejected", op=op, code=exc.code, error=exc.message)
                raise
            except Exception:
                db.rollback()
                raise
            else:
                for name, args in db.info.pop("emitted", []):
                    logger.info(_LOG_NAMES[name], **args)
            finally:
                db.close()

    def _emit(self, db: Session, name: str, key: str, args: Dict[str, Any], caller: str) -> None:
        db.add(RegistryEvent(name=name, key=key, args=args, caller=caller))
        db.info.setdefault("emitted", []).append((name, args))

    @staticmethod
    def _caller(caller: str | None) -> str:
        try:
            return normalize_identity(caller)
        except InvalidInput:
            raise Unauthorized("Unknown caller identity.") from None

    @staticmethod
    def _state(db: Session) -> RegistryState:
        state = db.get(RegistryState, _STATE_ID)
        if state is None:
            raise RuntimeError("Registry not deployed")
        return state

    def _require_owner(self, db: Session, caller: str) -> RegistryState:
        state = self._state(db)
        if state.owner != caller:
            raise Unauthorized("Only owner can perform this action.")
        return state

    @staticmethod
    def _issuer(db: Session, identity: str) -> Optional[Issuer]:
        return db.execute(select(Issuer).where(Issuer.identity == identity)).scalar_one_or_none()

    def _require_issuer(self, db: Session, caller: str) -> Issuer:
        issuer = self._issuer(db, caller)
        if issuer is None or not issuer.authorized:
            raise Unauthorized("Not authorized to issue certificates.")
        return issuer

    @staticmethod
    def _require_certificate(db: Session, certificate_id: str) -> Certificate:
        cert = db.get(Certificate, certificate_id)
        if cert is None:
            raise NotFound(certificate_id=certificate_id)
        return cert

    # ------------------------------------------------------------------ #
    # deploy
    # ------------------------------------------------------------------ #

    def deploy(self, deployer: str) -> bool:
        """Cria o estado inicial (owner = deployer, já autorizado). Idempotente."""
        with self._tx("deploy") as db:
            deployer = normalize_identity(deployer, allow_null=False)
            if db.get(RegistryState, _STATE_ID) is not None:
                return False
            db.add(RegistryState(id=_STATE_ID, owner=deployer, total_certificates=0))
            db.add(Issuer(identity=deployer, authorized=True, issued_count=0))
            self._emit(db, OWNERSHIP_TRANSFERRED, deployer,
                       {"oldOwner": ZERO_IDENTITY, "newOwner": deployer}, deployer)
            self._emit(db, ISSUER_AUTHORIZED, deployer, {"issuer": deployer}, deployer)
            return True

    def is_deployed(self) -> bool:
        with self._tx("is_deployed") as db:
            return db.get(RegistryState, _STATE_ID) is not None

    # ------------------------------------------------------------------ #
    # certificados
    # ------------------------------------------------------------------ #

    def issue(
        self,
        caller: str,
        recipient_name: str,
        course_name: str,
        issuing_institution: str,
        certificate_hash: str,
    ) -> Issuance:
        """Emite e devolve ID + data da mesma transação."""
        with self._tx("issue_certificate") as db:
            caller = self._caller(caller)
            issuer = self._require_issuer(db, caller)
            _require_text(
                recipient_name=recipient_name,
                course_name=course_name,
                issuing_institution=issuing_institution,
                certificate_hash=certificate_hash,
            )
            issue_date = int(self._clock())
            certificate_id = compute_certificate_id(
                recipient_name=recipient_name,
                course_name=course_name,
                issuing_institution=issuing_institution,
                issue_date=issue_date,
                issuer=caller,
            )
            if db.get(Certificate, certificate_id) is not None:
                raise DuplicateCertificate(certificate_id=certificate_id)

            state = self._state(db)
            db.add(Certificate(
                certificate_id=certificate_id,
                recipient_name=recipient_name,
                course_name=course_name,
                issuing_institution=issuing_institution,
                issue_date=issue_date,
                certificate_hash=certificate_hash,
                is_valid=True,
                issuer=caller,
            ))
            db.flush()
            db.add(IssuerCertificate(issuer_id=issuer.id, certificate_id=certificate_id))
            state.total_certificates += 1
            issuer.issued_count += 1

            self._emit(db, CERTIFICATE_ISSUED, certificate_id, {
                "certificateId": certificate_id,
                "recipientName": recipient_name,
                "courseName": course_name,
                "issuingInstitution": issuing_institution,
                "issueDate": issue_date,
            }, caller)
            return Issuance(certificate_id, issue_date)

    def issue_certificate(
        self,
        caller: str,
        recipient_name: str,
        course_name: str,
        issuing_institution: str,
        certificate_hash: str,
    ) -> str:
        return self.issue(caller, recipient_name, course_name, issuing_institution, certificate_hash).certificate_id

    def verify_certificate(self, certificate_id: str) -> Verification:
        with self._tx("verify_certificate") as db:
            cert = db.get(Certificate, certificate_id)
            if cert is None:
                return NOT_FOUND_VERIFICATION
            return Verification(
                cert.is_valid,
                cert.recipient_name,
                cert.course_name,
                cert.issuing_institution,
                cert.issue_date,
            )

    def certificate_exists(self, certificate_id: str) -> bool:
        with self._tx("certificate_exists") as db:
            return db.get(Certificate, certificate_id) is not None

    def get_certificate(self, certificate_id: str) -> Certificate:
        with self._tx("get_certificate") as db:
            return self._require_certificate(db, certificate_id)

    get_certificate_details = get_certificate

    def get_certificate_hash(self, certificate_id: str) -> str:
        with self._tx("get_certificate_hash") as db:
            return self._require_certificate(db, certificate_id).certificate_hash

    def revoke_certificate(self, caller: str, certificate_id: str) -> None:
        # qualquer issuer autorizado revoga qualquer certificado (não só o emissor original)
        with self._tx("revoke_certificate") as db:
            caller = self._caller(caller)
            self._require_issuer(db, caller)
            cert = self._require_certificate(db, certificate_id)
            if not cert.is_valid:
                raise AlreadyRevoked(certificate_id=certificate_id)
            cert.is_valid = False
            self._emit(db, CERTIFICATE_REVOKED, certificate_id, {"certificateId": certificate_id}, caller)

    def transfer_certificate(self, caller: str, certificate_id: str, new_recipient_name: str) -> None:
        with self._tx("transfer_certificate") as db:
            caller = self._caller(caller)
            self._require_issuer(db, caller)
            cert = self._require_certificate(db, certificate_id)
            if not cert.is_valid:
                raise InvalidState("Cannot transfer a revoked certificate.", certificate_id=certificate_id)
            _require_text(new_recipient_name=new_recipient_name)
            old_recipient = cert.recipient_name
            cert.recipient_name = new_recipient_name
        # sem evento on-ledger para transferência; fica só no log
        logger.info(
            "certificate_transferred",
            certificate_id=certificate_id,
            old_recipient=old_recipient,
            new_recipient=new_recipient_name,
            caller=caller,
        )

    # ------------------------------------------------------------------ #
    # issuers / owner
    # ------------------------------------------------------------------ #

    def authorize_issuer(self, caller: str, identity: str) -> None:
        with self._tx("authorize_issuer") as db:
            caller = self._caller(caller)
            self._require_owner(db, caller)
            identity = normalize_identity(identity, allow_null=False)
            issuer = self._issuer(db, identity)
            if issuer is not None and issuer.authorized:
                raise AlreadyAuthorized(issuer=identity)
            if issuer is None:
                db.add(Issuer(identity=identity, authorized=True, issued_count=0))
            else:
                issuer.authorized = True
            self._emit(db, ISSUER_AUTHORIZED, identity, {"issuer": identity}, caller)

    def revoke_issuer(self, caller: str, identity: str) -> None:
        with self._tx("revoke_issuer") as db:
            caller = self._caller(caller)
            state = self._require_owner(db, caller)
            identity = normalize_identity(identity)
            if identity == state.owner:
                raise CannotRevokeOwner(issuer=identity)
            issuer = self._issuer(db, identity)
            if issuer is None or not issuer.authorized:
                raise NotAuthorized(issuer=identity)
            issuer.authorized = False
            self._emit(db, ISSUER_REVOKED, identity, {"issuer": identity}, caller)

    def change_owner(self, caller: str, new_owner: str) -> None:
        """Troca o owner. Autorização de issuer de ambos fica como está."""
        with self._tx("change_owner") as db:
            caller = self._caller(caller)
            state = self._require_owner(db, caller)
            new_owner = normalize_identity(new_owner, allow_null=False)
            old_owner = state.owner
            state.owner = new_owner
            self._emit(db, OWNERSHIP_TRANSFERRED, new_owner,
                       {"oldOwner": old_owner, "newOwner": new_owner}, caller)

    # ------------------------------------------------------------------ #
    # leitura / enumeração (públicas)
    # ------------------------------------------------------------------ #

    def owner(self) -> str:
        with self._tx("owner") as db:
            return self._state(db).owner

    def total_certificates(self) -> int:
        with self._tx("total_certificates") as db:
            return self._state(db).total_certificates

    def is_authorized_issuer(self, identity: str) -> bool:
        with self._tx("is_authorized_issuer") as db:
            identity = normalize_identity(identity)
            issuer = self._issuer(db, identity)
            return bool(issuer and issuer.authorized)

    def get_all_authorized_issuers(self) -> List[str]:
        with self._tx("get_all_authorized_issuers") as db:
            rows = db.execute(
                select(Issuer.identity).where(Issuer.authorized.is_(True)).order_by(Issuer.id)
            ).scalars().all()
            return list(rows)

    def get_certificate_count_by_issuer(self, issuer: str) -> int:
        with self._tx("get_certificate_count_by_issuer") as db:
            issuer = normalize_identity(issuer)
            row = self._issuer(db, issuer)
            return row.issued_count if row else 0

    def get_all_certificates_issued_by(self, issuer: str) -> List[str]:
        with self._tx("get_all_certificates_issued_by") as db:
            issuer = normalize_identity(issuer)
            stmt = (
                select(IssuerCertificate.certificate_id)
                .join(Issuer, Issuer.id == IssuerCertificate.issuer_id)
                .where(Issuer.identity == issuer)
                .order_by(IssuerCertificate.id)
            )
            return list(db.execute(stmt).scalars().all())

    def get_valid_certificate_count_by_issuer(self, issuer: str) -> int:
        with self._tx("get_valid_certificate_count_by_issuer") as db:
            issuer = normalize_identity(issuer)
            stmt = (
                select(func.count(IssuerCertificate.id))
                .join(Issuer, Issuer.id == IssuerCertificate.issuer_id)
                .join(Certificate, Certificate.certificate_id == IssuerCertificate.certificate_id)
                .where(Issuer.identity == issuer, Certificate.is_valid.is_(True))
            )
            return int(db.execute(stmt).scalar() or 0)

    def _scan(self, db: Session, *criteria) -> List[str]:
        # mesma ordem de uma varredura linear: issuers por ordem histórica,
        # certificados de cada issuer por ordem de emissão
        stmt = (
            select(IssuerCertificate.certificate_id)
            .join(Issuer, Issuer.id == IssuerCertificate.issuer_id)
            .join(Certificate, Certificate.certificate_id == IssuerCertificate.certificate_id)
            .where(*criteria)
            .order_by(Issuer.id, IssuerCertificate.id)
        )
        return list(db.execute(stmt).scalars().all())

    def get_certificates_by_course(self, issuer: str, course_name: str) -> List[str]:
        with self._tx("get_certificates_by_course") as db:
            issuer = normalize_identity(issuer)
            return self._scan(db, Issuer.identity == issuer, Certificate.course_name == course_name)

    def get_certificates_by_institution(self, institution: str) -> List[str]:
        with self._tx("get_certificates_by_institution") as db:
            return self._scan(db, Certificate.issuing_institution == institution)

    def get_certificates_by_recipient(self, recipient_name: str) -> List[str]:
        with self._tx("get_certificates_by_recipient") as db:
            return self._scan(db, Certificate.recipient_name == recipient_name)

    def get_events(self, *, name: Optional[str] = None, after_id: int = 0, limit: int = 100) -> List[RegistryEvent]:
        with self._tx("get_events") as db:
            stmt = select(RegistryEvent).where(RegistryEvent.id > after_id)
            if name:
                stmt = stmt.where(RegistryEvent.name == name)
            stmt = stmt.order_by(RegistryEvent.id).limit(limit)
            return list(db.execute(stmt).scalars().all())
