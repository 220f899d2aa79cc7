from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_errors, read_json_body
from ..container import Container
from .serializers import member_to_json, member_with_stats_to_json, reading_stats_to_json


def register(app: Flask, container: Container) -> None:
    @app.route("/members", methods=["GET"], endpoint="members_list")
    @api_errors("Failed to fetch members")
    def members_list():
        return jsonify([member_with_stats_to_json(m) for m in container.member_service.list_with_stats()])

    @app.route("/members", methods=["POST"], endpoint="members_create")
    @api_errors("Failed to create member")
    def members_create():
        data = read_json_body()
        member = container.member_service.create(
            nickname=data.get("nickname"),
            role=data.get("role"),
            contact=data.get("contact"),
        )
        app.logger.info("Member %s created (%s)", member.member_id, member.nickname)
        return jsonify(member_to_json(member)), 201

    @app.route("/members/<int:member_id>", methods=["GET"], endpoint="members_get")
    @api_errors("Failed to fetch member")
    def members_get(member_id: int):
        return jsonify(member_to_json(container.member_service.get(member_id)))

    @app.route("/members/<int:member_id>", methods=["PUT"], endpoint="members_update")
    @api_errors("Failed to update member")
    def members_update(member_id: int):
        data = read_json_body()
        member = container.member_service.update(
            member_id,
            nickname=data.get("nickname"),
            role=data.get("role"),
            contact=data.get("contact"),
        )
        return jsonify(member_to_json(member)), 200

    @app.route("/members/<int:member_id>", methods=["DELETE"], endpoint="members_delete")
    @api_errors("Failed to delete member")
    def members_delete(member_id: int):
        container.member_service.delete(member_id)
        app.logger.info("Member %s deleted", member_id)
        return jsonify({"message": "Member deleted successfully"}), 200

    @app.route("/members/<int:member_id>/books", methods=["GET"], endpoint="members_books")
    @api_errors("Failed to fetch member books")
    def members_books(member_id: int):
        return jsonify(reading_stats_to_json(container.member_service.reading_stats(member_id)))
