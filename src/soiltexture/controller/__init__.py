"""
The CONTROLLER layer turns raw user input into new compositions.
`solver` and `reducer` are pure; `store` wraps them for Qt.
"""
