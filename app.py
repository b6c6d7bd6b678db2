import logging
from flask import Flask, g, jsonify
from config import Config
from extensions import db, login_manager, migrate, cors
from services.realtime import RealtimeService
from utils.errors import Forbidden, Unauthorized, register_error_handlers
from utils.token import bearer_token, decode_access_token


def create_app(config_class=Config):
    # Create and configure the app
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)  # Initialize Flask-Migrate
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": app.config['CORS_ORIGIN']}},
        supports_credentials=True,
    )

    # Broadcast service; handlers reach it through services.realtime.get_realtime()
    realtime = RealtimeService()
    realtime.init_app(app)

    register_error_handlers(app)

    # Import User model here to avoid circular imports
    from models.user import User

    # Configure login manager
    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, user_id)

    @login_manager.request_loader
    def load_user_from_request(req):
        token = bearer_token(req.headers.get('Authorization'))
        if token is None:
            return None
        claims = decode_access_token(token)
        if claims is None:
            g.invalid_credential = True
            return None
        user = db.session.get(User, claims['id'])
        if user is None:
            g.invalid_credential = True
        return user

    @login_manager.unauthorized_handler
    def unauthorized():
        if g.get('invalid_credential'):
            return Forbidden().to_response()
        return Unauthorized().to_response()

    # Register blueprints
    from routes.auth import auth_bp
    from routes.logs import logs_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(logs_bp, url_prefix='/api/logs')

    @app.route('/')
    def index():
        return jsonify({'message': 'Hello World from MoodTrackr API!'})

    # Create database tables
    with app.app_context():
        db.create_all()

    return app


if __name__ == '__main__':
    logging.basicConfig(
        level=Config.LOG_LEVEL,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    app = create_app()
    realtime = app.extensions['realtime']
    try:
        # Werkzeug serves the threading async mode; use eventlet/gevent in production
        realtime.socketio.run(
            app, host='0.0.0.0', port=app.config['PORT'], allow_unsafe_werkzeug=True
        )
    finally:
        realtime.shutdown()
