# app.py
import os

import click
from flask import Flask, jsonify
from sqlalchemy import text
from config.config import Config
from db.database import init_engine, init_db, auto_migrate, SessionLocal
from models.student import Student
from routes.auth import bp as auth_bp
from routes.students import bp as students_bp
from routes.views import bp as views_bp
from utils.session_store import SessionStore
from utils.uploads import ensure_directory, find_orphaned_uploads, discard_upload
from flask_cors import CORS


def create_app(overrides=None):
    app = Flask(__name__)

    # Load config values from Config
    app.config["DEBUG"] = Config.DEBUG
    app.config["LOG_LEVEL"] = Config.LOG_LEVEL
    app.config["DATABASE_URL"] = Config.DATABASE_URL
    app.config["ALLOWED_ORIGINS"] = Config.ALLOWED_ORIGINS

    # Folders
    app.config["UPLOAD_FOLDER"] = Config.UPLOAD_FOLDER
    app.config["REPORT_FOLDER"] = Config.REPORT_FOLDER
    app.config["VIEWS_FOLDER"] = Config.VIEWS_FOLDER
    app.config["REPORT_FONT_PATH"] = Config.REPORT_FONT_PATH

    # Sessions / credentials
    app.config["SESSION_COOKIE_NAME"] = Config.SESSION_COOKIE_NAME
    app.config["SESSION_LIFETIME_MINUTES"] = Config.SESSION_LIFETIME_MINUTES
    app.config["SESSION_COOKIE_SECURE"] = Config.SESSION_COOKIE_SECURE
    app.config["PASSWORD_HASH_METHOD"] = Config.PASSWORD_HASH_METHOD

    if overrides:
        app.config.update(overrides)

    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Relative folders are resolved against the working directory, not the app package
    for key in ("UPLOAD_FOLDER", "REPORT_FOLDER", "VIEWS_FOLDER"):
        app.config[key] = os.path.abspath(app.config[key])
    ensure_directory(app.config["UPLOAD_FOLDER"])
    ensure_directory(app.config["REPORT_FOLDER"])

    # CORS
    CORS(app, origins=app.config["ALLOWED_ORIGINS"], supports_credentials=True)

    # Ensure DB schema exists and apply safe auto-migrations (adds missing tables/columns)
    init_engine(app.config["DATABASE_URL"])
    try:
        auto_migrate()
    except Exception:
        # Fallback to init_db if auto_migrate fails for some reason
        app.logger.exception("auto_migrate failed, falling back to init_db()")
        init_db()

    SessionStore(app.config["SESSION_LIFETIME_MINUTES"]).init_app(app)

    # register blueprints
    app.register_blueprint(views_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(students_bp)

    @app.teardown_appcontext
    def remove_session(exc=None):
        SessionLocal.remove()

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    @app.route("/health/db", methods=["GET"])
    def health_db():
        """Simple DB health check endpoint.
        Returns 200 if DB is reachable and a basic select 1 works, otherwise returns 503.
        """
        from db.database import get_engine
        try:
            with get_engine().connect() as conn:
                conn.execute(text("SELECT 1"))
            return jsonify({"db": "ok"})
        except Exception as e:
            app.logger.exception("DB health check failed: %s", e)
            return jsonify({"db": "error", "error": str(e)}), 503

    register_commands(app)
    return app


def register_commands(app):
    @app.cli.command("init-db")
    def init_db_command():
        """Create tables and add any missing columns."""
        auto_migrate()
        click.echo("Database schema verified.")

    @app.cli.command("purge-sessions")
    def purge_sessions_command():
        """Delete expired login sessions."""
        removed = app.extensions["session_store"].purge_expired()
        click.echo(f"Removed {removed} expired session(s).")

    @app.cli.command("purge-uploads")
    @click.option("--dry-run", is_flag=True, help="List orphaned files without deleting them.")
    def purge_uploads_command(dry_run):
        """Delete uploaded files that no student record references."""
        session = SessionLocal()
        try:
            referenced = [row.pdf for row in session.query(Student.pdf).filter(Student.pdf != "")]
        finally:
            session.close()

        orphans = find_orphaned_uploads(app.config["UPLOAD_FOLDER"], referenced)
        for path in orphans:
            if not dry_run:
                discard_upload(path)
            click.echo(path)
        click.echo(f"{len(orphans)} orphaned upload(s){' found' if dry_run else ' removed'}.")


if __name__ == "__main__":
    app = create_app()
    app.run(host=Config.APP_HOST, port=Config.APP_PORT, debug=Config.DEBUG)
