from flask import jsonify, request

from app import db
from . import construction_stages_bp
from .exceptions import InvalidStatusError, NotFoundError, ValidationError
from .services.repository import ConstructionStageRepository


def _repository():
    return ConstructionStageRepository(db.session)


def _json_body():
    """Parsed JSON object from the request, or None when the body is not an object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


@construction_stages_bp.errorhandler(ValidationError)
def handle_validation_error(error):
    return jsonify({'error': str(error), 'errors': error.errors}), 400


@construction_stages_bp.errorhandler(InvalidStatusError)
def handle_invalid_status(error):
    return jsonify({'error': str(error)}), 400


@construction_stages_bp.errorhandler(NotFoundError)
def handle_not_found(error):
    return jsonify({'error': str(error), 'id': error.stage_id}), 404


@construction_stages_bp.route('', methods=['GET'])
def list_stages():
    return jsonify(_repository().list_all())


@construction_stages_bp.route('/<int:stage_id>', methods=['GET'])
def get_stage(stage_id):
    stage = _repository().get_by_id(stage_id)
    if stage is None:
        raise NotFoundError(stage_id)
    return jsonify(stage)


@construction_stages_bp.route('', methods=['POST'])
def create_stage():
    data = _json_body()
    if data is None:
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    return jsonify(_repository().create(data)), 201


@construction_stages_bp.route('/<int:stage_id>', methods=['PATCH'])
def update_stage(stage_id):
    data = _json_body()
    if data is None:
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    return jsonify(_repository().update(data, stage_id))


@construction_stages_bp.route('/<int:stage_id>', methods=['DELETE'])
def delete_stage(stage_id):
    message = _repository().delete(stage_id)
    return jsonify({'message': message, 'id': stage_id})
