from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_errors, read_json_body
from ..container import Container
from .serializers import book_to_json


def register(app: Flask, container: Container) -> None:
    @app.route("/books", methods=["GET"], endpoint="books_list")
    @api_errors("Failed to fetch books")
    def books_list():
        return jsonify([book_to_json(b) for b in container.book_service.list_books()])

    @app.route("/books", methods=["POST"], endpoint="books_create")
    @api_errors("Failed to create book")
    def books_create():
        data = read_json_body()
        book = container.book_service.create(
            title=data.get("title"),
            author=data.get("author"),
            registered_date=data.get("registeredDate"),
            notes=data.get("notes"),
            genres=data.get("genres"),
            added_by_id=data.get("addedById"),
        )
        app.logger.info("Book %s created (%s / %s)", book.book_id, book.title, book.author)
        return jsonify(book_to_json(book)), 201

    @app.route("/books/<int:book_id>", methods=["GET"], endpoint="books_get")
    @api_errors("Failed to fetch book")
    def books_get(book_id: int):
        return jsonify(book_to_json(container.book_service.get(book_id)))

    @app.route("/books/<int:book_id>", methods=["PUT"], endpoint="books_update")
    @api_errors("Failed to update book")
    def books_update(book_id: int):
        data = read_json_body()
        book = container.book_service.update(
            book_id,
            title=data.get("title"),
            author=data.get("author"),
            registered_date=data.get("registeredDate"),
            notes=data.get("notes"),
            genres=data.get("genres"),
            added_by_id=data.get("addedById"),
        )
        return jsonify(book_to_json(book)), 200

    @app.route("/books/<int:book_id>", methods=["DELETE"], endpoint="books_delete")
    @api_errors("Failed to delete book")
    def books_delete(book_id: int):
        container.book_service.delete(book_id)
        app.logger.info("Book %s deleted", book_id)
        return jsonify({"message": "Book deleted successfully"}), 200
