# controllers/dashboard.py
"""Dashboard and analytics routes."""

from flask import Blueprint, jsonify

from ceps.services.dashboard_service import DashboardService
from ceps.utils.auth import token_required, staff_required, current_user

dashboard_bp = Blueprint('dashboard', __name__)
analytics_bp = Blueprint('analytics', __name__)


@dashboard_bp.route('', methods=['GET'])
@token_required
def dashboard():
    data = DashboardService.get_dashboard_data(current_user())
    return jsonify(dict(success=True, **data))


@analytics_bp.route('/overview', methods=['GET'])
@staff_required
def analytics_overview():
    return jsonify({'success': True, 'data': DashboardService.get_analytics_overview()})
