"""
Person API — Routes Package
============================

Route Inventory:
    - persons.py: POST   /api                (create a person)
                  GET    /api/{id_or_name}   (read by id or name)
                  PATCH  /api/{id_or_name}   (partial update by id or name)
                  DELETE /api/{id_or_name}   (delete by id or name)
    - health.py:  GET    /                   (liveness text)
                  GET    /health             (service and database health)

Routes stay thin: they extract request data, call the PersonService, and
return the result. Resolution and error translation live in the service.
"""
