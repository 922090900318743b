# run.py
import os

from rentdrive import create_app

# Create app from factory
app = create_app()

if __name__ == '__main__':
    app.run(
        host=os.environ.get('HOST', '0.0.0.0'),
        port=int(os.environ.get('PORT', 7000)),
        debug=os.environ.get('FLASK_DEBUG', '').lower() in ('1', 'true')
    )
