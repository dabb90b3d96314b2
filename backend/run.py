from arena import create_app, socketio

app = create_app()

if __name__ == '__main__':
    host = app.config['HOST']
    port = app.config['PORT']
    app.logger.info(f"[startup] listening on {host}:{port}")
    # Use SocketIO server to enable websockets in dev
    socketio.run(app, host=host, port=port, allow_unsafe_werkzeug=True)
