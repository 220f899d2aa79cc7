from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_errors, read_json_body
from ..container import Container
from .serializers import meeting_to_json


def register(app: Flask, container: Container) -> None:
    service = container.meeting_service

    @app.route("/meetings", methods=["GET"], endpoint="meetings_list")
    @api_errors("Failed to fetch meetings")
    def meetings_list():
        return jsonify([meeting_to_json(m, tz=service.tz) for m in service.list_meetings()])

    @app.route("/meetings", methods=["POST"], endpoint="meetings_create")
    @api_errors("Failed to create meeting")
    def meetings_create():
        data = read_json_body()
        meeting = service.create(
            date=data.get("date"),
            time=data.get("time"),
            title=data.get("title"),
            location=data.get("location"),
            memo=data.get("memo"),
            attendees=data.get("attendees"),
            book_ids=data.get("bookIds"),
        )
        app.logger.info("Meeting %s created with %d attendee(s)", meeting.meeting_id, len(meeting.attendances))
        return jsonify(meeting_to_json(meeting, tz=service.tz)), 201

    @app.route("/meetings/<int:meeting_id>", methods=["GET"], endpoint="meetings_get")
    @api_errors("Failed to fetch meeting")
    def meetings_get(meeting_id: int):
        return jsonify(meeting_to_json(service.get(meeting_id), tz=service.tz))

    @app.route("/meetings/<int:meeting_id>", methods=["PUT"], endpoint="meetings_update")
    @api_errors("Failed to update meeting")
    def meetings_update(meeting_id: int):
        data = read_json_body()
        meeting = service.update(
            meeting_id,
            title=data.get("title"),
            date=data.get("date"),
            time=data.get("time"),
            location=data.get("location"),
            memo=data.get("memo"),
            attendees=data.get("attendees"),
            book_ids=data.get("bookIds"),
        )
        return jsonify(meeting_to_json(meeting, tz=service.tz)), 200

    @app.route("/meetings/<int:meeting_id>", methods=["DELETE"], endpoint="meetings_delete")
    @api_errors("Failed to delete meeting")
    def meetings_delete(meeting_id: int):
        service.delete(meeting_id)
        app.logger.info("Meeting %s deleted", meeting_id)
        return jsonify({"message": "Meeting deleted successfully"}), 200
