#!/usr/bin/env python3
"""
Wall Paint Visualizer API Server
One endpoint per user action: upload, pick a palette color, click the wall,
pick a shade.  Each session keeps its own image and last detected wall.
"""

import os
import logging
import uuid
from io import BytesIO
from typing import Dict, Optional
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from flask import Flask, request, jsonify, send_file
from flask_cors import CORS

# --- Centralized Logging Configuration ---
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
    datefmt='%H:%M:%S'
)

from .errors import WallPaintError
from .models.color import Color
from .models.paint_session import PaintSession
from .models.palette import load_palette
from .pipeline.wall_painter import apply_shade, choose_base_color, select_wall
from .services.image_service import ImageService
from .services.region_service import RegionService
from .services.shade_service import ShadeService

app = Flask(__name__)
CORS(app)  # Enable CORS for frontend communication

MAX_CONTENT_LENGTH = int(os.getenv("MAX_UPLOAD_SIZE_MB", "100")) * 1024 * 1024
app.config['MAX_CONTENT_LENGTH'] = MAX_CONTENT_LENGTH

# Initialize services
image_service = ImageService()
region_service = RegionService()
shade_service = ShadeService()

logger = logging.getLogger(__name__)

# Session storage: session_id → PaintSession
sessions: Dict[str, PaintSession] = {}


def _json_object() -> dict:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _session_from_json() -> Optional[PaintSession]:
    payload = _json_object()
    return sessions.get(payload.get('session_id'))


def _error(message: str, status: int = 400):
    return jsonify({'success': False, 'message': message}), status


@app.route('/api/load-image', methods=['POST'])
def load_image():
    """Decode an uploaded photo and start (or restart) a session."""
    if 'image' not in request.files:
        return _error('No image provided')

    file = request.files['image']
    if file.filename == '':
        return _error('No file selected')

    try:
        buffer = image_service.decode(file.read())
    except (WallPaintError, ValueError) as e:
        logger.error(f"Image decode error: {e}")
        return _error(f'Could not read image: {e}')

    session_id = request.form.get('session_id') or str(uuid.uuid4())
    sessions[session_id] = PaintSession(buffer=buffer, threshold=region_service.WALL_THRESHOLD)
    logger.info(f"Session {session_id}: loaded {buffer.width}x{buffer.height}x{buffer.channels}")

    return jsonify({
        'success': True,
        'session_id': session_id,
        'width': buffer.width,
        'height': buffer.height,
        'channels': buffer.channels,
    })


@app.route('/api/palette', methods=['GET'])
def palette():
    """Base paint colors with their preview gradients."""
    colors = load_palette()
    gradients = shade_service.palette_gradients(colors)
    return jsonify({
        'success': True,
        'palette': [
            {'color': color.to_hex(), 'gradient': [s.to_hex() for s in gradient]}
            for color, gradient in zip(colors, gradients)
        ],
    })


@app.route('/api/shades', methods=['POST'])
def shades():
    """Generate the shade grid for a chosen base color."""
    session = _session_from_json()
    if session is None:
        return _error('Invalid session')

    try:
        color = Color.from_hex(str(_json_object().get('color', '')))
    except ValueError as e:
        return _error(str(e))

    grid = choose_base_color(session, color, shade_service=shade_service)
    return jsonify({'success': True, 'shades': [s.to_hex() for s in grid]})


@app.route('/api/select-wall', methods=['POST'])
def select_wall_step():
    """Detect the wall under a clicked pixel."""
    session = _session_from_json()
    if session is None:
        return _error('Invalid session')

    payload = _json_object()
    try:
        x, y = int(payload['x']), int(payload['y'])
        threshold = payload.get('threshold')
        if threshold is not None:
            threshold = int(threshold)
        region = select_wall(session, x, y, threshold, region_service=region_service)
    except (KeyError, TypeError, ValueError) as e:
        return _error(f'Bad click coordinates: {e}')
    except WallPaintError as e:
        return _error(str(e))

    preview = image_service.outline_region(session.buffer, region)
    return jsonify({
        'success': True,
        'region': region.as_dict(),
        'preview': image_service.to_base64(preview),
    })


@app.route('/api/apply-shade', methods=['POST'])
def apply_shade_step():
    """Paint the selected wall with a shade index or an explicit hex color."""
    session = _session_from_json()
    if session is None:
        return _error('Invalid session')

    payload = _json_object()
    try:
        if 'color' in payload:
            shade = Color.from_hex(str(payload['color']))
        else:
            shade = int(payload['shade_index'])
        apply_shade(session, shade)
    except WallPaintError as e:
        return _error(str(e))
    except (KeyError, TypeError, ValueError, IndexError) as e:
        return _error(f'Bad shade selection: {e}')

    return jsonify({
        'success': True,
        'region': session.region.as_dict(),
        'image': image_service.to_base64(session.buffer.pixels),
    })


@app.route('/api/image/<session_id>')
def serve_image(session_id):
    """Current pixels of a session as PNG."""
    session = sessions.get(session_id)
    if session is None:
        return jsonify({'error': 'Session not found'}), 404
    data = image_service.to_png_bytes(session.buffer.pixels)
    return send_file(BytesIO(data), mimetype='image/png')


@app.route('/api/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return jsonify({
        'status': 'healthy',
        'message': 'Wall Paint Visualizer API is running',
        'active_sessions': len(sessions)
    })


@app.route('/api/clear-session', methods=['POST'])
def clear_session():
    """Drop a session and free its image."""
    payload = _json_object()
    session_id = payload.get('session_id')
    if session_id and session_id in sessions:
        del sessions[session_id]
        return jsonify({'success': True, 'message': 'Session cleared'})
    return jsonify({'success': False, 'message': 'Session not found'})


@app.errorhandler(413)
def too_large(e):
    """Handle file too large error."""
    return jsonify({'error': f'File too large. Maximum size is {MAX_CONTENT_LENGTH // (1024 * 1024)}MB.'}), 413


@app.errorhandler(500)
def internal_error(e):
    """Handle internal server error."""
    logger.error(f"Internal server error: {e}")
    return jsonify({'error': 'Internal server error'}), 500


def main():
    port = int(os.getenv("API_SERVER_PORT", "5002"))
    print("🎨 Starting Wall Paint Visualizer API Server...")
    print(f"🔧 Max upload size: {MAX_CONTENT_LENGTH // (1024 * 1024)}MB")
    print("📋 Workflow:")
    print("   1. /api/load-image")
    print("   2. /api/palette  →  /api/shades")
    print("   3. /api/select-wall")
    print("   4. /api/apply-shade")
    print("=" * 60)
    app.run(debug=False, host='0.0.0.0', port=port)


if __name__ == '__main__':
    main()
