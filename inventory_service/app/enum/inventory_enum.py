from enum import Enum


class AssetStatus(str, Enum):

    AVAILABLE = "AVAILABLE"
    IN_USE = "IN_USE"
    IN_REPAIR = "IN_REPAIR"
    DECOMMISSIONED = "DECOMMISSIONED"


class AssignmentStatus(str, Enum):

    ACTIVE = "ACTIVE"
    RETURNED = "RETURNED"
    TRANSFERRED = "TRANSFERRED"


class MovementType(str, Enum):

    ENTRADA = "ENTRADA"
    SALIDA = "SALIDA"


class MovementSubtype(str, Enum):

    # entries
    COMPRA = "COMPRA"
    DONACION_IN = "DONACION_IN"
    TRANSFERENCIA_IN = "TRANSFERENCIA_IN"
    DEVOLUCION = "DEVOLUCION"
    # exits
    BAJA = "BAJA"
    VENTA = "VENTA"
    DONACION_OUT = "DONACION_OUT"
    TRANSFERENCIA_OUT = "TRANSFERENCIA_OUT"
    ASIGNACION = "ASIGNACION"


ENTRY_SUBTYPES = frozenset({
    MovementSubtype.COMPRA,
    MovementSubtype.DONACION_IN,
    MovementSubtype.TRANSFERENCIA_IN,
    MovementSubtype.DEVOLUCION,
})

EXIT_SUBTYPES = frozenset({
    MovementSubtype.BAJA,
    MovementSubtype.VENTA,
    MovementSubtype.DONACION_OUT,
    MovementSubtype.TRANSFERENCIA_OUT,
    MovementSubtype.ASIGNACION,
})

# assignment_crud writes DEVOLUCION and ASIGNACION alongside the custody change
MANUAL_ENTRY_SUBTYPES = ENTRY_SUBTYPES - {MovementSubtype.DEVOLUCION}
MANUAL_EXIT_SUBTYPES = EXIT_SUBTYPES - {MovementSubtype.ASIGNACION}

# entries that bring a decommissioned asset back into stock
REACTIVATING_SUBTYPES = frozenset({
    MovementSubtype.COMPRA,
    MovementSubtype.DONACION_IN,
    MovementSubtype.TRANSFERENCIA_IN,
})

# exits that permanently remove the asset
DECOMMISSIONING_SUBTYPES = frozenset({
    MovementSubtype.BAJA,
    MovementSubtype.VENTA,
    MovementSubtype.DONACION_OUT,
})


class MaintenanceType(str, Enum):

    PREVENTIVO = "PREVENTIVO"
    CORRECTIVO = "CORRECTIVO"


class MaintenanceStatus(str, Enum):

    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class IncidentType(str, Enum):

    DANO = "DANO"
    PERDIDA = "PERDIDA"
    ROBO = "ROBO"
    MAL_FUNCIONAMIENTO = "MAL_FUNCIONAMIENTO"


class IncidentStatus(str, Enum):

    REPORTED = "REPORTED"
    INVESTIGATING = "INVESTIGATING"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"


# incidents that mean the asset is gone for good
DECOMMISSIONING_INCIDENTS = frozenset({IncidentType.ROBO, IncidentType.PERDIDA})
