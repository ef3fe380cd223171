from decimal import Decimal, InvalidOperation
from flask import Blueprint, request, current_app, jsonify
from .gateway import XenditGateway, GatewaySetupError, UnsupportedOperationError
from .host import FlaskHost
from .schemas import GatewaySettings

xendit_bp = Blueprint('xendit', __name__)


def get_gateway(api_key: str | None = None) -> XenditGateway:
    key = api_key if api_key is not None else (current_app.config.get('XENDIT_API_KEY') or '').strip()
    return XenditGateway(
        GatewaySettings(api_key=key),
        FlaskHost(),
        api_url=current_app.config.get('XENDIT_API_URL'),
    )


@xendit_bp.route('/xendit/process', methods=['POST'])
def process():
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return jsonify({'status': 'error', 'message': 'JSON object body is required'}), 400
    contact_info = {k: v for k, v in payload.items() if k not in {'amount', 'invoices', 'options'}}
    amount = payload.get('amount')
    if amount is None:
        return jsonify({'status': 'error', 'message': 'amount is required'}), 400
    try:
        Decimal(str(amount))
        if contact_info.get('id') is not None:
            int(contact_info['id'])
    except (InvalidOperation, TypeError, ValueError):
        current_app.logger.info('Rejected malformed process request id=%s amount=%s', contact_info.get('id'), amount)
        return jsonify({'status': 'error', 'message': 'id and amount must be numeric'}), 400
    gateway = get_gateway()
    try:
        html = gateway.render_process(contact_info, amount, payload.get('invoices') or [], payload.get('options') or {})
    except GatewaySetupError as e:
        current_app.logger.error('Xendit process setup failed client_id=%s err=%s', contact_info.get('client_id'), e)
        return jsonify({'status': 'error', 'message': 'Could not reach payment gateway. Please try again shortly.'}), 502
    return html


@xendit_bp.route('/callback/gw/<company_id>/xendit/', methods=['GET', 'POST'])
def callback(company_id):
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        body = None
    gateway = get_gateway()
    try:
        result = gateway.validate(request.args.to_dict(), body)
    except GatewaySetupError:
        return jsonify({'status': 'lookup failed'}), 502
    if result is None:
        return jsonify({'status': 'ignored'}), 200
    current_app.logger.info('Xendit callback company_id=%s reference_id=%s status=%s webhook=%s',
                            company_id, result.reference_id, result.status, body is not None)
    return jsonify({'status': 'ok', 'transaction': result.to_dict()}), 200


@xendit_bp.route('/xendit/success')
def success():
    gateway = get_gateway()
    try:
        result = gateway.success(request.args.to_dict())
    except GatewaySetupError:
        return jsonify({'status': 'lookup failed'}), 502
    if result is None:
        return jsonify({'status': 'not found'}), 404
    return jsonify({'status': 'ok', 'transaction': result.to_dict()}), 200


@xendit_bp.route('/xendit/settings', methods=['POST'])
def settings():
    meta = request.get_json(silent=True) or request.form.to_dict()
    if not isinstance(meta, dict):
        return jsonify({'valid': False, 'errors': {'api_key': 'Settings must be a JSON object.'}}), 400
    errors = get_gateway(api_key=meta.get('api_key') or '').validate_settings(meta)
    if errors:
        return jsonify({'valid': False, 'errors': errors}), 400
    return jsonify({'valid': True, 'encrypt': XenditGateway.encryptable_fields()}), 200


@xendit_bp.route('/xendit/refund', methods=['POST'])
@xendit_bp.route('/xendit/void', methods=['POST'])
def unsupported():
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        payload = {}
    gateway = get_gateway()
    try:
        if request.path.endswith('/refund'):
            gateway.refund(payload.get('reference_id'), payload.get('transaction_id'), payload.get('amount'), payload.get('notes'))
        else:
            gateway.void(payload.get('reference_id'), payload.get('transaction_id'), payload.get('notes'))
    except UnsupportedOperationError as e:
        return jsonify({'status': 'error', 'message': str(e)}), 400
    return jsonify({'status': 'ok'}), 200
