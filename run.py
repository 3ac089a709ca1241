"""
Main entrypoint for running the application
"""
if __name__ == "__main__":
    from node_editor.main import app
    from node_editor.config import API_HOST, API_PORT
    import uvicorn

    uvicorn.run(app, host=API_HOST, port=API_PORT)
