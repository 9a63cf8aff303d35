import enum
import uuid
from dataclasses import dataclass
from typing import Protocol

from app.core.errors import Forbidden, NotFound, Unauthenticated


class Role(str, enum.Enum):
    HEALTHCARE_PROVIDER = "healthcare_provider"
    PARENT = "parent"
    NCD_PATIENT = "ncd_patient"


class Operation(str, enum.Enum):
    BABY_CREATE = "baby:create"
    BABY_LIST = "baby:list"
    BABY_READ = "baby:read"
    BABY_UPDATE = "baby:update"
    BABY_DELETE = "baby:delete"

    VACCINATION_CREATE = "vaccination:create"
    VACCINATION_UPDATE = "vaccination:update"
    VACCINATION_LIST = "vaccination:list"
    VACCINATION_UPCOMING = "vaccination:upcoming"
    VACCINATION_STATS = "vaccination:stats"

    NCD_PATIENT_CREATE = "ncd_patient:create"
    NCD_PATIENT_LIST = "ncd_patient:list"
    NCD_PATIENT_READ = "ncd_patient:read"
    NCD_PATIENT_UPDATE = "ncd_patient:update"
    NCD_PATIENT_STATS = "ncd_patient:stats"

    MEDICAL_RECORD_CREATE = "medical_record:create"
    MEDICAL_RECORD_LIST = "medical_record:list"


class Scope(str, enum.Enum):
    ANY = "any"  # every instance
    OWN = "own"  # only instances owned by the actor


class DenyReason(str, enum.Enum):
    UNAUTHENTICATED = "Unauthenticated"
    INSUFFICIENT_ROLE = "InsufficientRole"
    NOT_OWNER = "NotOwner"
    NOT_FOUND = "NotFound"


_P = Role.HEALTHCARE_PROVIDER
_PARENT = Role.PARENT
_NCD = Role.NCD_PATIENT

POLICY: dict[Operation, dict[Role, Scope]] = {
    Operation.BABY_CREATE: {_PARENT: Scope.OWN},
    Operation.BABY_LIST: {_P: Scope.ANY, _PARENT: Scope.OWN},
    Operation.BABY_READ: {_P: Scope.ANY, _PARENT: Scope.OWN},
    Operation.BABY_UPDATE: {_P: Scope.ANY, _PARENT: Scope.OWN},
    Operation.BABY_DELETE: {_P: Scope.ANY, _PARENT: Scope.OWN},

    Operation.VACCINATION_CREATE: {_P: Scope.ANY},
    Operation.VACCINATION_UPDATE: {_P: Scope.ANY},
    Operation.VACCINATION_LIST: {_P: Scope.ANY, _PARENT: Scope.OWN},
    Operation.VACCINATION_UPCOMING: {_P: Scope.ANY},
    Operation.VACCINATION_STATS: {_P: Scope.ANY},

    Operation.NCD_PATIENT_CREATE: {_P: Scope.ANY, _NCD: Scope.OWN},
    Operation.NCD_PATIENT_LIST: {_P: Scope.ANY, _NCD: Scope.OWN},
    Operation.NCD_PATIENT_READ: {_P: Scope.ANY, _NCD: Scope.OWN},
    Operation.NCD_PATIENT_UPDATE: {_P: Scope.ANY, _NCD: Scope.OWN},
    Operation.NCD_PATIENT_STATS: {_P: Scope.ANY},

    Operation.MEDICAL_RECORD_CREATE: {_P: Scope.ANY},
    Operation.MEDICAL_RECORD_LIST: {_P: Scope.ANY, _NCD: Scope.OWN},
}


class Actor(Protocol):
    user_id: uuid.UUID
    role: Role


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: DenyReason | None = None
    scope: Scope | None = None

    def __bool__(self) -> bool:
        return self.allowed


def scope_for(actor: Actor | None, op: Operation) -> Scope | None:
    if actor is None:
        return None
    return POLICY.get(op, {}).get(actor.role)


def check_role(actor: Actor | None, op: Operation) -> Decision:
    """Role-only check, applied before any record is looked up."""
    if actor is None:
        return Decision(False, DenyReason.UNAUTHENTICATED)
    scope = scope_for(actor, op)
    if scope is None:
        return Decision(False, DenyReason.INSUFFICIENT_ROLE)
    return Decision(True, scope=scope)


def authorize(actor: Actor | None, op: Operation, owner_id: uuid.UUID | None) -> Decision:
    """Full decision for one resource instance owned by ``owner_id``."""
    decision = check_role(actor, op)
    if not decision:
        return decision
    if decision.scope is Scope.OWN and (owner_id is None or owner_id != actor.user_id):
        return Decision(False, DenyReason.NOT_OWNER, scope=decision.scope)
    return decision


def not_found() -> Decision:
    return Decision(False, DenyReason.NOT_FOUND)


def enforce(decision: Decision, what: str = "Resource") -> Decision:
    if decision.allowed:
        return decision
    if decision.reason is DenyReason.UNAUTHENTICATED:
        raise Unauthenticated()
    if decision.reason is DenyReason.NOT_FOUND:
        raise NotFound(f"{what} not found")
    raise Forbidden(decision.reason.value)
