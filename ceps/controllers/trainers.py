# controllers/trainers.py
"""Trainer allocation routes. Reading is open to every account, writes to faculty/admin."""

from flask import Blueprint, jsonify

from ceps.services.trainer_service import TrainerService
from ceps.utils.auth import token_required, staff_required, current_user
from ceps.utils.validation import get_json_body

trainers_bp = Blueprint('trainers', __name__)


@trainers_bp.route('', methods=['POST'])
@staff_required
def create_trainer():
    trainer = TrainerService.create_trainer(get_json_body(), created_by=current_user())

    return jsonify({
        'success': True,
        'message': 'Trainer created successfully',
        'trainer': trainer.to_dict()
    }), 201


@trainers_bp.route('', methods=['GET'])
@token_required
def list_trainers():
    trainers = TrainerService.list_trainers()
    return jsonify({
        'success': True,
        'count': len(trainers),
        'trainers': [trainer.to_dict() for trainer in trainers]
    })


@trainers_bp.route('/<trainer_id>', methods=['PUT'])
@staff_required
def update_trainer(trainer_id):
    trainer = TrainerService.update_trainer(trainer_id, get_json_body())

    return jsonify({
        'success': True,
        'message': 'Trainer updated successfully',
        'trainer': trainer.to_dict()
    })


@trainers_bp.route('/<trainer_id>', methods=['DELETE'])
@staff_required
def delete_trainer(trainer_id):
    name = TrainerService.delete_trainer(trainer_id)
    return jsonify({'success': True, 'message': f'Trainer "{name}" deleted successfully'})
