"""
Database context manager for Flask application.
Provides database instances without explicit dependency passing.
"""
from flask import current_app, g

MONGO_DB_EXTENSION = "coursehub_mongo_db"


class DatabaseContext:
    """
    Flask context manager for database instances.
    Works in both request context (controllers) and application context (CLI commands).
    """

    @staticmethod
    def get_mongo_db():
        """
        Get MongoDB database instance from Flask context.

        Works in both:
        - Request context (controllers) - uses 'g' for request-local storage
        - Application context (CLI, startup) - reads the app extension directly
        """
        if "mongo_db" not in g:
            g.mongo_db = current_app.extensions[MONGO_DB_EXTENSION]
        return g.mongo_db
