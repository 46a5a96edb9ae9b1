from django.urls import path

from . import views

app_name = "filemanager"

urlpatterns = [
    path("admin/filemanager/", views.FileListView.as_view(), name="index"),
    path("admin/filemanager/upload/", views.FileUploadView.as_view(), name="upload"),
    path("admin/filemanager/destroy/", views.FileDeleteView.as_view(), name="destroy"),
]
