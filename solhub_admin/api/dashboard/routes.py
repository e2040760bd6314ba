# solhub_admin/api/dashboard/routes.py
from flask import current_app, jsonify

from solhub_admin.core.permissions import require_dashboard_admin
from solhub_admin.extensions import cache, db
from solhub_admin.services import StatsService
from solhub_admin.services.stats_service import STATS_CACHE_KEY
from . import dashboard_bp


@dashboard_bp.route("/stats", methods=["GET"])
@require_dashboard_admin
def dashboard_stats():
    stats = cache.get(STATS_CACHE_KEY)
    if stats is None:
        stats = StatsService(db.session).dashboard_stats()
        cache.set(STATS_CACHE_KEY, stats, timeout=current_app.config.get("STATS_CACHE_TIMEOUT", 60))
    return jsonify({"data": stats})
