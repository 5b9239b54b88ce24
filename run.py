"""
Entry Point Script (Bootstrap)
==============================
This script is a convenient starting point of the application for development.

Why is this file needed?
------------------------
1. It is located outside the 'src' package to act as a runner without
   installing the package.
2. It modifies 'sys.path' so Python can resolve imports like
   'from soiltexture.model...' without errors.

Usage:
    $ python run.py
"""
import sys
import os

# Add the 'src' directory to the Python path
current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from soiltexture.main import main

if __name__ == "__main__":
    main()
