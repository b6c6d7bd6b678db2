from datetime import datetime
from extensions import db
from models.user import generate_id


class Log(db.Model):
    __tablename__ = 'logs'
    __table_args__ = (db.UniqueConstraint('user_id', 'date', name='uq_log_user_date'),)

    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    date = db.Column(db.Date, nullable=False, index=True)

    # Core metrics (1-5)
    mood = db.Column(db.Integer, nullable=False)
    anxiety = db.Column(db.Integer, nullable=False)
    stress_level = db.Column(db.Integer)

    # Sleep
    sleep_hours = db.Column(db.Float)
    sleep_quality = db.Column(db.String(20))       # poor/fair/good/excellent
    sleep_disturbances = db.Column(db.Boolean)

    # Activity and social
    physical_activity = db.Column(db.String(500))  # comma-joined list
    activity_duration = db.Column(db.Integer)       # minutes
    social_interactions = db.Column(db.String(20)) # none/minimal/moderate/high

    # Symptoms (comma-joined lists)
    depression_symptoms = db.Column(db.String(500))
    anxiety_symptoms = db.Column(db.String(500))

    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Foreign Keys
    user_id = db.Column(db.String(32), db.ForeignKey('users.id'), nullable=False, index=True)

    def __init__(self, user_id, date, mood, anxiety, **metrics):
        self.id = generate_id()
        self.user_id = user_id
        self.date = date
        self.mood = mood
        self.anxiety = anxiety
        for field, value in metrics.items():
            setattr(self, field, value)

    def to_dict(self):
        """Wire representation (camelCase, as the browser client expects)."""
        return {
            'id': self.id,
            'userId': self.user_id,
            'date': self.date.isoformat(),
            'mood': self.mood,
            'anxiety': self.anxiety,
            'stressLevel': self.stress_level,
            'sleepHours': self.sleep_hours,
            'sleepQuality': self.sleep_quality,
            'sleepDisturbances': self.sleep_disturbances,
            'physicalActivity': self.physical_activity,
            'activityDuration': self.activity_duration,
            'socialInteractions': self.social_interactions,
            'depressionSymptoms': self.depression_symptoms,
            'anxietySymptoms': self.anxiety_symptoms,
            'notes': self.notes,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<Log {self.user_id} {self.date}>'
