"""Reservation stores.

Every store keeps the reservations as one ordered collection and exposes the
same five operations. ids are compared by normalized integer value, so
``3`` and ``"3"`` address the same record.

New ids are ``last record id + 1`` (or 1 when empty), not the maximum id.
"""
from __future__ import annotations

import copy
import json
import logging
import os
import threading
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from sqlalchemy.exc import SQLAlchemyError

from hotel_paraiso.exceptions import StoreError
from hotel_paraiso.models import Reserva, reserva_to_dict
from hotel_paraiso.validation import RESERVA_FIELDS

logger = logging.getLogger(__name__)


# Rango de INTEGER en SQLite; fuera de el ningun id puede coincidir
MAX_ID = 2 ** 63 - 1


def normalize_id(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return None
    if not isinstance(value, int) or abs(value) > MAX_ID:
        return None
    return value


def build_reserva(new_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'id': new_id,
        'hotel': data.get('hotel'),
        'fecha_inicio': data.get('fecha_inicio'),
        'fecha_fin': data.get('fecha_fin'),
        'tipo_habitacion': data.get('tipo_habitacion'),
        'estado': data.get('estado') or 'pendiente',
        'num_huespedes': data.get('num_huespedes'),
    }


def patch_fields(patch: Dict[str, Any]) -> Dict[str, Any]:
    # id y claves desconocidas nunca se copian
    return {key: patch[key] for key in RESERVA_FIELDS if key in patch}


@runtime_checkable
class ReservaStore(Protocol):
    def find_all(self) -> List[Dict[str, Any]]: ...
    def find_by_id(self, reserva_id) -> Optional[Dict[str, Any]]: ...
    def create(self, data: Dict[str, Any]) -> Dict[str, Any]: ...
    def update(self, reserva_id, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]: ...
    def delete(self, reserva_id) -> bool: ...


class ListStore:
    """CRUD over a list loaded and saved wholesale by ``_load``/``_save``.

    A per-instance lock serializes each read-modify-write cycle.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def _load(self) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def _save(self, reservas: List[Dict[str, Any]]) -> None:
        raise NotImplementedError

    @staticmethod
    def _find_index(reservas, reserva_id) -> int:
        target = normalize_id(reserva_id)
        if target is None:
            return -1
        for idx, reserva in enumerate(reservas):
            if normalize_id(reserva.get('id')) == target:
                return idx
        return -1

    def find_all(self) -> List[Dict[str, Any]]:
        with self._lock:
            return self._load()

    def find_by_id(self, reserva_id) -> Optional[Dict[str, Any]]:
        with self._lock:
            reservas = self._load()
        idx = self._find_index(reservas, reserva_id)
        return reservas[idx] if idx >= 0 else None

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            reservas = self._load()
            last_id = normalize_id(reservas[-1].get('id')) if reservas else None
            nueva = build_reserva((last_id or 0) + 1, data)
            reservas.append(nueva)
            self._save(reservas)
        logger.info("Reserva %s creada", nueva['id'])
        return copy.deepcopy(nueva)

    def update(self, reserva_id, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            reservas = self._load()
            idx = self._find_index(reservas, reserva_id)
            if idx == -1:
                return None
            reservas[idx] = {**reservas[idx], **patch_fields(patch)}
            self._save(reservas)
            actualizada = reservas[idx]
        logger.info("Reserva %s actualizada", actualizada.get('id'))
        return copy.deepcopy(actualizada)

    def delete(self, reserva_id) -> bool:
        with self._lock:
            reservas = self._load()
            idx = self._find_index(reservas, reserva_id)
            if idx == -1:
                return False
            eliminada = reservas.pop(idx)
            self._save(reservas)
        logger.info("Reserva %s eliminada", eliminada.get('id'))
        return True


class MemoryStore(ListStore):
    """In-process store, mainly for tests."""

    def __init__(self, reservas: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__()
        self._reservas = copy.deepcopy(reservas or [])

    def _load(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._reservas)

    def _save(self, reservas: List[Dict[str, Any]]) -> None:
        self._reservas = copy.deepcopy(reservas)


class JsonFileStore(ListStore):
    """Whole collection kept as a JSON array in a single file.

    A missing or unreadable-as-JSON file reads as an empty collection.
    Other I/O failures raise ``StoreError``.
    """

    def __init__(self, path: str) -> None:
        super().__init__()
        self.path = path

    def _load(self) -> List[Dict[str, Any]]:
        try:
            with open(self.path, 'r', encoding='utf-8') as fh:
                raw = json.load(fh)
        except FileNotFoundError:
            logger.warning("Archivo de reservas no encontrado: %s", self.path)
            return []
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.warning("Archivo de reservas corrupto %s: %s", self.path, exc)
            return []
        except OSError as exc:
            logger.error("No se pudo leer %s: %s", self.path, exc)
            raise StoreError(f"No se pudo leer el archivo {self.path}", cause=exc) from exc

        if not isinstance(raw, list):
            logger.warning("Estructura invalida en %s: se esperaba una lista", self.path)
            return []
        return [r for r in raw if isinstance(r, dict)]

    def _save(self, reservas: List[Dict[str, Any]]) -> None:
        directory = os.path.dirname(self.path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as fh:
                json.dump(reservas, fh, ensure_ascii=False, indent=2)
        except OSError as exc:
            logger.error("Error al guardar las reservas en %s: %s", self.path, exc)
            raise StoreError(f"No se pudo guardar el archivo {self.path}", cause=exc) from exc


class SQLAlchemyStore:
    """Reservations as rows of the ``reservas`` table (Flask-SQLAlchemy).

    Needs an application context; inside a request one is always active.
    """

    def __init__(self, db) -> None:
        self.db = db

    def _fail(self, action: str, exc: Exception):
        self.db.session.rollback()
        logger.error("Error de base de datos al %s: %s", action, exc)
        return StoreError(f"Error de base de datos al {action}", cause=exc)

    def find_all(self) -> List[Dict[str, Any]]:
        try:
            return [reserva_to_dict(r) for r in Reserva.query.order_by(Reserva.id).all()]
        except SQLAlchemyError as exc:
            raise self._fail('leer las reservas', exc) from exc

    def _get(self, reserva_id):
        target = normalize_id(reserva_id)
        if target is None:
            return None
        return self.db.session.get(Reserva, target)

    def find_by_id(self, reserva_id) -> Optional[Dict[str, Any]]:
        try:
            reserva = self._get(reserva_id)
        except SQLAlchemyError as exc:
            raise self._fail('leer la reserva', exc) from exc
        return reserva_to_dict(reserva) if reserva else None

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            last = Reserva.query.order_by(Reserva.id.desc()).first()
            nueva = Reserva(**build_reserva((last.id if last else 0) + 1, data))
            self.db.session.add(nueva)
            self.db.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail('crear la reserva', exc) from exc
        logger.info("Reserva %s creada", nueva.id)
        return reserva_to_dict(nueva)

    def update(self, reserva_id, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            reserva = self._get(reserva_id)
            if not reserva:
                return None
            for key, value in patch_fields(patch).items():
                setattr(reserva, key, value)
            self.db.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail('actualizar la reserva', exc) from exc
        logger.info("Reserva %s actualizada", reserva.id)
        return reserva_to_dict(reserva)

    def delete(self, reserva_id) -> bool:
        try:
            reserva = self._get(reserva_id)
            if not reserva:
                return False
            self.db.session.delete(reserva)
            self.db.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail('eliminar la reserva', exc) from exc
        logger.info("Reserva %s eliminada", reserva_id)
        return True
