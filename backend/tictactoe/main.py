from flask import Blueprint, jsonify, current_app

main = Blueprint('main', __name__)

@main.route('/')
def index():
    router = current_app.extensions['tictactoe']
    return jsonify({
        'message': 'Welcome to the tic-tac-toe room server!',
        'rooms': len(router.store),
        'connections': len(router.registry),
    })
