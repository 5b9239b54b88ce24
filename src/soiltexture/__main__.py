"""Run with: python -m soiltexture"""
from soiltexture.main import main

if __name__ == "__main__":
    main()
