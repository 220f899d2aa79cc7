from __future__ import annotations

from flask import Flask, jsonify

from ..books.serializers import book_to_json
from ..common.http import api_errors
from ..container import Container
from ..meetings.serializers import meeting_to_json


def register(app: Flask, container: Container) -> None:
    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @api_errors("Failed to fetch dashboard")
    def dashboard():
        s = container.dashboard_service.summary()
        tz = container.meeting_service.tz
        return jsonify(
            {
                "totalMembers": s.total_members,
                "totalBooks": s.total_books,
                "booksThisMonth": s.books_this_month,
                "upcomingMeetings": [meeting_to_json(m, tz=tz) for m in s.upcoming_meetings],
                "recentBooks": [book_to_json(b) for b in s.recent_books],
            }
        )
