"""
Notes API — Routes Package
===========================

Route Inventory:
    - notes.py:   GET    {prefix}/list
                  POST   {prefix}/create
                  PUT    {prefix}/update/{id}
                  DELETE {prefix}/delete/{id}
    - health.py:  GET    /health

Routes stay thin: extract the request data, call NoteService, pick the
status code. Business rules live in services/.
"""
