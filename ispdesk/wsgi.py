from ispdesk import create_app

app = create_app()
