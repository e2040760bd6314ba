# solhub_admin/api/health/routes.py

from flask import jsonify, current_app
from redis import Redis
from sqlalchemy import text
import time

from solhub_admin.extensions import db
from . import health_bp


def check_database():
    """Check database connection"""
    try:
        db.session.execute(text('SELECT 1'))
        return True, "Healthy"
    except Exception as e:
        return False, str(e)


def check_redis():
    """Check Redis connection"""
    try:
        redis_url = current_app.config.get('REDIS_URL', 'redis://localhost:6379')
        redis_client = Redis.from_url(redis_url, socket_connect_timeout=2)
        redis_client.ping()
        return True, "Healthy"
    except Exception as e:
        return False, str(e)


@health_bp.route('/health')
def health_check():
    """Basic health check endpoint"""
    start_time = time.time()

    db_healthy, db_message = check_database()
    redis_healthy, redis_message = check_redis()

    response_time = time.time() - start_time

    status = "healthy" if all([db_healthy, redis_healthy]) else "unhealthy"

    health_status = {
        "status": status,
        "response_time": f"{response_time:.3f}s",
        "services": {
            "database": {
                "status": "healthy" if db_healthy else "unhealthy",
                "message": db_message
            },
            "redis": {
                "status": "healthy" if redis_healthy else "unhealthy",
                "message": redis_message
            }
        },
        "version": current_app.config.get('VERSION', '1.0.0')
    }

    status_code = 200 if status == "healthy" else 503
    return jsonify(health_status), status_code
