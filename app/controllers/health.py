"""Health check endpoints for monitoring and load balancers."""

import time
from datetime import datetime, timezone
from threading import active_count

import psutil
from flask import jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app import app, db, limiter

_STARTED_AT = time.time()


def _database_ok() -> tuple[bool, str]:
    try:
        db.session.execute(text("SELECT 1"))
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        return False, f"Database connection failed: {e}"
    return True, "Database connection successful"


@app.route("/health")
@limiter.exempt  # Don't rate limit health checks
def health_check():
    """Health check endpoint for monitoring and load balancers.

    Returns:
        JSON response with health status and metrics
        - 200: Healthy or degraded
        - 503: Unhealthy (database connection failed)
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {}
    }

    # 1. Database connectivity check
    ok, message = _database_ok()
    health_status["checks"]["database"] = {
        "status": "ok" if ok else "error",
        "message": message,
    }
    if not ok:
        health_status["status"] = "unhealthy"
        return jsonify(health_status), 503

    # 2. Memory check (warn if >85% used)
    memory = psutil.virtual_memory()
    health_status["checks"]["memory"] = {
        "status": "ok" if memory.percent < 85 else "warning",
        "usage_percent": round(memory.percent, 2),
        "available_mb": round(memory.available / 1024 / 1024, 2)
    }
    if memory.percent >= 90:
        health_status["status"] = "degraded"

    # 3. Active threads
    health_status["checks"]["threads"] = {
        "status": "ok",
        "active_threads": active_count(),
    }

    # 4. Application uptime
    uptime_hours = (time.time() - _STARTED_AT) / 3600
    health_status["checks"]["uptime"] = {
        "status": "ok",
        "uptime_hours": round(uptime_hours, 2),
        "uptime_days": round(uptime_hours / 24, 2)
    }

    # Degraded is still operational
    return jsonify(health_status), 200


@app.route("/health/ready")
@limiter.exempt
def readiness_check():
    """Readiness check - 200 if the database is accessible, 503 otherwise."""
    ok, _ = _database_ok()
    if ok:
        return jsonify({"status": "ready"}), 200
    return jsonify({"status": "not_ready"}), 503


@app.route("/health/live")
@limiter.exempt
def liveness_check():
    """Liveness check - the process is up and serving requests."""
    return jsonify({"status": "alive"}), 200
