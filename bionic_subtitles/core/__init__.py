# bionic_subtitles/core/__init__.py
