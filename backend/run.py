from chessroom import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Use SocketIO server to enable websockets in dev
    app.logger.info(f"Server is running on port {app.config['PORT']}")
    socketio.run(app, host='0.0.0.0', port=app.config['PORT'], debug=True)
