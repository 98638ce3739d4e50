"""
The MODEL layer contains the dataset, the scales and the application state.
Apart from the store (a QObject for its signals) it has NO knowledge of the GUI.
"""
