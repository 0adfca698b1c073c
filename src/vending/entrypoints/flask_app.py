"""
Point d'entrée Flask.

L'API Flask est un thin adapter : elle convertit les requêtes HTTP en
events, les publie sur le bus, et lit l'état des machines dans le store.

L'API ne contient aucune logique métier.

Le bus ne supporte qu'un seul drain à la fois : le serveur Flask traitant
les requêtes dans plusieurs threads, tout accès au bus et au store passe
par `lock`.
"""

from __future__ import annotations

import threading

from flask import Flask, jsonify, request

from vending.adapters.store import MachineNotFound
from vending.domain import events, model
from vending.service_layer import bootstrap


app = Flask(__name__)
system = bootstrap.bootstrap()
lock = threading.Lock()


def _as_dict(machine: model.MachineRecord) -> dict:
    return {
        "id": machine.id,
        "stock_level": machine.stock_level,
        "low_stock_warned": machine.low_stock_warned,
    }


def _publish(event_class: type[events.Event]):
    data = request.json or {}
    try:
        event = event_class(machine_id=data["machine_id"], quantity=data["quantity"])
    except (KeyError, events.InvalidQuantity) as e:
        return jsonify({"message": f"Requête invalide : {e}"}), 400

    with lock:
        try:
            system.bus.publish(event)
        except MachineNotFound as e:
            return jsonify({"message": str(e)}), 404
        machine = _as_dict(system.store.find(event.machine_id))

    return jsonify(machine), 201


@app.route("/sale", methods=["POST"])
def sale_endpoint():
    """
    POST /sale
    Body JSON : { machine_id, quantity }
    """
    return _publish(events.Sale)


@app.route("/refill", methods=["POST"])
def refill_endpoint():
    """
    POST /refill
    Body JSON : { machine_id, quantity }
    """
    return _publish(events.Refill)


@app.route("/machines", methods=["GET"])
def machines_endpoint():
    with lock:
        machines = [_as_dict(machine) for machine in system.store.list()]
    return jsonify(machines), 200


@app.route("/machines/<machine_id>", methods=["GET"])
def machine_endpoint(machine_id: str):
    with lock:
        try:
            machine = _as_dict(system.store.find(machine_id))
        except MachineNotFound:
            return "not found", 404
    return jsonify(machine), 200
