"""A four-group GroupThem puzzle shared by the engine, store and API tests."""

DESSERTS = ['cake', 'pie', 'pudding', 'cookie']
STATIONERY = ['pen', 'notebook', 'stapler', 'envelope']
DETECTIVES = ['holmes', 'poirot', 'marple', 'spade']
CREATURES = ['centaur', 'mermaid', 'minotaur', 'sphinx']

DESSERTS_PUZZLE = {
    'groups': [
        {'name': 'common desserts', 'ranking': 'easy'},
        {'name': 'items found in a stationery store', 'ranking': 'medium'},
        {'name': 'famous detectives in literature', 'ranking': 'hard'},
        {'name': 'mythical creatures with human traits', 'ranking': 'very_difficult'},
    ],
    'words': [
        {'text': text, 'group': group}
        for group, texts in [
            ('common desserts', DESSERTS),
            ('items found in a stationery store', STATIONERY),
            ('famous detectives in literature', DETECTIVES),
            ('mythical creatures with human traits', CREATURES),
        ]
        for text in texts
    ],
}
