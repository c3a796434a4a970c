# models_bootstrap.py
# import every model so relationship() strings resolve and Base.metadata is complete
from client import models as _client_models
from property import models as _property_models
from publication import models as _publication_models
