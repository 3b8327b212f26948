"""
Point d'entrée Flask.

L'API Flask est un thin adapter : elle se contente de
convertir les requêtes HTTP en commands, les envoie au
message bus, et convertit les résultats en réponses HTTP.

L'API ne contient aucune logique métier.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date

from flask import Flask, jsonify, request

from timeoff import config
from timeoff.domain import commands
from timeoff.domain.model import Boundary, HalfDay, TimeOffRequest
from timeoff.service_layer import bootstrap, handlers
from timeoff.views import views

logging.basicConfig(level=config.get_log_level())

app = Flask(__name__)
bus = bootstrap.bootstrap()


class InvalidPayload(Exception):
    """Corps de requête incomplet ou mal formé."""


def _boundary(data: dict) -> Boundary:
    return Boundary(
        date=date.fromisoformat(data["date"]),
        half_day=HalfDay(data["half_day"]),
    )


def _time_off_request(data: dict | None, request_id: uuid.UUID | None = None) -> TimeOffRequest:
    """
    Construit la demande décrite par le corps JSON.

    Sans `request_id` explicite, l'identifiant est lu dans le corps :
    c'est le cas des routes qui désignent une demande existante.
    """
    try:
        return TimeOffRequest(
            user_id=int(data["user_id"]),
            request_id=request_id or uuid.UUID(data["request_id"]),
            start=_boundary(data["start"]),
            end=_boundary(data["end"]),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise InvalidPayload(str(e)) from e


def _request_id(raw: str) -> uuid.UUID:
    try:
        return uuid.UUID(raw)
    except ValueError as e:
        raise InvalidPayload(str(e)) from e


@app.errorhandler(handlers.RequestRejected)
def rejected(e: handlers.RequestRejected):
    return jsonify({"error": e.error.value, "message": str(e)}), 400


@app.errorhandler(InvalidPayload)
def invalid_payload(e: InvalidPayload):
    return jsonify({"error": "invalid_payload", "message": str(e)}), 400


@app.route("/requests", methods=["POST"])
def request_time_off_endpoint():
    """
    POST /requests
    Body JSON : { user_id, start: {date, half_day}, end: {date, half_day} }

    Crée une demande de congé. L'identifiant est toujours attribué
    par le serveur : une demande existante ne peut pas être recréée.
    """
    time_off = _time_off_request(request.json, request_id=uuid.uuid4())
    bus.handle(commands.RequestTimeOff(time_off))
    return jsonify({"request_id": str(time_off.request_id)}), 201


@app.route("/requests/cancellation", methods=["POST"])
def request_cancellation_endpoint():
    """POST /requests/cancellation : l'employé demande l'annulation d'un congé commencé."""
    bus.handle(commands.RequestToCancelTimeOff(_time_off_request(request.json)))
    return "OK", 201


@app.route("/requests/refusal", methods=["POST"])
def refuse_request_endpoint():
    """POST /requests/refusal : le manager refuse une demande pas encore commencée."""
    bus.handle(commands.RefuseRequest(_time_off_request(request.json)))
    return "OK", 201


ID_COMMANDS = {
    "validate": commands.ValidateRequest,
    "cancel": commands.CancelRequest,
    "cancellation/accept": commands.AcceptCancellation,
    "cancellation/refuse": commands.RefuseCancellation,
}


@app.route("/requests/<int:user_id>/<request_id>/<path:action>", methods=["POST"])
def manager_decision_endpoint(user_id: int, request_id: str, action: str):
    """
    POST /requests/<user_id>/<request_id>/<action>

    Décisions du manager sur une demande existante :
    validate, cancel, cancellation/accept, cancellation/refuse.
    """
    command_class = ID_COMMANDS.get(action)
    if command_class is None:
        return "not found", 404
    bus.handle(command_class(user_id=user_id, request_id=_request_id(request_id)))
    return "OK", 200


@app.route("/requests/<int:user_id>", methods=["GET"])
def requests_view_endpoint(user_id: int):
    """
    GET /requests/<user_id>

    Retourne les demandes d'un employé et leur état (lecture CQRS).
    """
    result = views.requests(user_id, bus.uow)
    if not result:
        return "not found", 404
    return jsonify(result), 200
