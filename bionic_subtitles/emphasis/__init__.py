# bionic_subtitles/emphasis/__init__.py
