# bionic_subtitles/nlp/__init__.py
