from flask import Flask, jsonify, request
from sonos_group import (
    InvalidSelection,
    SessionController,
    SonosGroupError,
    describe,
    list_zones,
    load_settings,
)
import aiohttp
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
settings = load_settings()

def _session():
    return aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=settings.request_timeout))

def _wants_resume():
    return request.args.get("resume", "0").lower() in ("1", "true", "yes")

def _group_response(result):
    body = {
        "success": True,
        "coordinator": result.desired.coordinator.room_name,
        "members": [m.room_name for m in result.desired.members],
    }
    if result.resume_warning:
        body["warning"] = str(result.resume_warning)
    return jsonify(body)

def _error_response(e):
    logger.error(str(e))
    status = 400 if isinstance(e, InvalidSelection) else 502
    return jsonify({"success": False, "error": str(e)}), status

@app.route("/api/zones")
async def zones():
    """List the current zones."""
    try:
        async with _session() as session:
            snapshot = await list_zones(session, settings.base_url)
        return jsonify({"success": True, "zones": [
            {"coordinator": z.coordinator.room_name, "members": [m.room_name for m in z.members]}
            for z in snapshot.zones
        ]})
    except SonosGroupError as e:
        return _error_response(e)

@app.route("/api/combinations")
async def combinations():
    """List the selectable combinations, numbered from 1."""
    try:
        async with _session() as session:
            options = await SessionController(session, settings).candidates()
        return jsonify({"success": True, "combinations": [
            {"index": i, "label": describe(c), "rooms": [s.room_name for s in c]}
            for i, c in enumerate(options, start=1)
        ]})
    except SonosGroupError as e:
        return _error_response(e)

@app.route("/api/group/<int:index>", methods=["POST"])
async def create_group(index):
    """Regroup the fleet around the combination at the given index."""
    resume = _wants_resume()

    async def choose(options):
        return index

    async def confirm(desired):
        return resume

    try:
        async with _session() as session:
            result = await SessionController(session, settings).create_group(choose, confirm)
        return _group_response(result)
    except SonosGroupError as e:
        return _error_response(e)

@app.route("/api/preset/<int:index>", methods=["POST"])
async def preset_group(index):
    """Regroup the fleet using a configured preset."""
    resume = _wants_resume()

    async def choose(options):
        return index

    async def confirm(desired):
        return resume

    try:
        async with _session() as session:
            result = await SessionController(session, settings).preset_group(choose, confirm)
        return _group_response(result)
    except SonosGroupError as e:
        return _error_response(e)

@app.route("/api/ungroup", methods=["POST"])
async def ungroup_all():
    """Ungroup every zone."""
    try:
        async with _session() as session:
            await SessionController(session, settings).ungroup_all()
        return jsonify({"success": True})
    except SonosGroupError as e:
        return _error_response(e)

if __name__ == "__main__":
    import hypercorn.asyncio
    import asyncio

    config = hypercorn.Config()
    config.bind = ["0.0.0.0:5000"]
    asyncio.run(hypercorn.asyncio.serve(app, config))
