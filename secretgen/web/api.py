from flask import Flask, jsonify, request
from secretgen.config import load_config
from secretgen.generator import generate

app = Flask(__name__)
# entropy source is server-side only; None -> config file
app.config.setdefault("SECRETGEN_RNDSRC", None)

@app.route('/')
def home():
    return jsonify({
        "message": "secretgen API is running"
    })

@app.route('/generate', methods=['POST'])
def generate_route():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    cfg = load_config()
    length = data.get('length', cfg['length'])
    charlists = data.get('charlists', cfg['charlists'])
    no_default = data.get('no_default', cfg['no_default'])
    level_fail = data.get('error_level_fail', cfg['error_level_fail'])

    if not isinstance(length, int) or isinstance(length, bool) or length <= 0:
        return jsonify({'error': 'length must be a positive integer'}), 400
    if not isinstance(charlists, list) or not all(isinstance(c, str) for c in charlists):
        return jsonify({'error': 'charlists must be a list of strings'}), 400
    if not isinstance(level_fail, int) or not 0 <= level_fail <= 4:
        return jsonify({'error': 'error_level_fail must be between 0 and 4'}), 400

    rndsrc = app.config.get("SECRETGEN_RNDSRC") or cfg['rndsrc']
    result = generate(
        length=length,
        charlists=charlists,
        no_default=bool(no_default),
        rndsrc=rndsrc,
        error_level_fail=level_fail,
    )
    body = {
        'secret': result.secret,
        'failed': result.failed,
        'diagnostics': [
            {'level_str': name, 'level': level, 'message': msg}
            for name, level, msg in result.diagnostics
        ],
    }
    return jsonify(body), (422 if result.failed else 200)

if __name__ == "__main__":
    app.run(debug=True)
