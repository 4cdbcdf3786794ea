from cardbattle.app import create_app

app = create_app()
socketio = app.extensions['socketio']

if __name__ == '__main__':
    # Use SocketIO server to enable websockets in dev
    socketio.run(app, debug=True)
