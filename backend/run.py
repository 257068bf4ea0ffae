from rating_rooms import create_app, socketio

app = create_app()

if __name__ == '__main__':
    try:
        # Werkzeug dev server; install eventlet or gevent for deployment
        socketio.run(app, host=app.config['HOST'], port=app.config['PORT'], allow_unsafe_werkzeug=True)
    finally:
        with app.app_context():
            app.extensions['room_registry'].close()
