"""
Flask Web Application for the OLX to LiaScript Converter
Simple upload/convert/download interface
"""

import os
import shutil
from pathlib import Path
from flask import Flask, render_template, request, send_file, jsonify
from werkzeug.utils import secure_filename

from courseconverter.config import ConverterConfig
from courseconverter.converter import CourseConverter
from courseconverter.utils.archive import ARCHIVE_SUFFIX, archive_stem

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 100 * 1024 * 1024  # 100MB max file size
app.config['UPLOAD_FOLDER'] = '/tmp/uploads'
app.config['OUTPUT_FOLDER'] = '/tmp/outputs'


def _ensure_folders():
    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)
    os.makedirs(app.config['OUTPUT_FOLDER'], exist_ok=True)


@app.route('/')
def index():
    """Main page"""
    return render_template('index.html')


@app.route('/convert', methods=['POST'])
def convert():
    """Handle course upload and conversion"""
    if 'file' not in request.files:
        return jsonify({'error': 'No file uploaded'}), 400

    file = request.files['file']
    if file.filename == '':
        return jsonify({'error': 'No file selected'}), 400

    if not file.filename.endswith(ARCHIVE_SUFFIX):
        return jsonify({'error': f'File must be {ARCHIVE_SUFFIX}'}), 400

    _ensure_folders()
    filename = secure_filename(file.filename)
    upload_path = os.path.join(app.config['UPLOAD_FOLDER'], filename)

    try:
        file.save(upload_path)

        # Remove old output if exists
        course_name = archive_stem(filename)
        course_output = Path(app.config['OUTPUT_FOLDER']) / course_name
        if course_output.exists():
            shutil.rmtree(course_output)

        converter = CourseConverter(ConverterConfig(verbose=False))
        report = converter.convert(upload_path, app.config['OUTPUT_FOLDER'])

        # Zip course.md and media/
        archive_base = os.path.join(app.config['OUTPUT_FOLDER'], f'{course_name}_liascript')
        zip_path = shutil.make_archive(archive_base, 'zip', course_output)

        return jsonify({
            'success': True,
            'report': report,
            'download_url': f'/download/{os.path.basename(zip_path)}'
        })

    except Exception as e:
        return jsonify({'error': str(e)}), 500

    finally:
        if os.path.exists(upload_path):
            os.remove(upload_path)


@app.route('/download/<filename>')
def download(filename):
    """Download converted course"""
    file_path = os.path.join(app.config['OUTPUT_FOLDER'], secure_filename(filename))
    if not os.path.exists(file_path):
        return jsonify({'error': 'File not found'}), 404

    return send_file(
        file_path,
        as_attachment=True,
        download_name=filename
    )


@app.route('/health')
def health():
    """Health check endpoint"""
    return jsonify({'status': 'healthy'})


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    app.run(host='0.0.0.0', port=port, debug=False)
