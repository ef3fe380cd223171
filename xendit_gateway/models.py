from flask_sqlalchemy import SQLAlchemy
from datetime import datetime

db = SQLAlchemy()

class ContactNumber(db.Model):
    """Phone/fax numbers stored by the host platform per contact."""
    id = db.Column(db.Integer, primary_key=True)
    contact_id = db.Column(db.Integer, nullable=False, index=True)
    number = db.Column(db.String(64), nullable=False)
    type = db.Column(db.String(20), default='phone')  # phone, fax
    location = db.Column(db.String(20), default='home')  # home, work, mobile
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

class GatewayLog(db.Model):
    """Raw Xendit payloads kept for offline diagnosis."""
    id = db.Column(db.Integer, primary_key=True)
    source = db.Column(db.String(50), nullable=False)  # validate, success, webhook
    external_id = db.Column(db.String(255), index=True)
    payload_json = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, server_default=db.func.now())
