"""Admin file manager endpoints."""

import logging

from django import forms
from django.http import JsonResponse
from django.views import View

from megashop.core.mixins import AdminRequiredMixin
from megashop.core.pages import render_page, request_data

from . import services
from .exceptions import InvalidPathError, StoredFileNotFoundError

logger = logging.getLogger(__name__)


class UploadForm(forms.Form):
    file = forms.FileField()

    def clean_file(self):
        upload = self.cleaned_data["file"]
        if upload.size > services.MAX_FILE_SIZE:
            raise forms.ValidationError("The file may not be greater than 10240 kilobytes.")
        return upload


class FileListView(AdminRequiredMixin, View):
    def get(self, request):
        return render_page(request, "admin/filemanager/index", {
            "files": services.list_files(request),
        })


class FileUploadView(AdminRequiredMixin, View):
    def post(self, request):
        form = UploadForm(request.POST, request.FILES)
        if not form.is_valid():
            return JsonResponse(
                {"error": "Invalid file upload", "errors": form.errors.get_json_data()},
                status=422,
            )

        try:
            path = services.save_file(form.cleaned_data["file"])
        except OSError as e:
            logger.exception("File upload error")
            return JsonResponse({"error": f"Failed to upload file: {e}"}, status=500)

        return JsonResponse(services.file_info(path, request))


class FileDeleteView(AdminRequiredMixin, View):
    """Delete by ``path``; accepts POST or DELETE with a JSON body."""

    def post(self, request):
        path = request_data(request).get("path")
        if not path:
            return JsonResponse({"error": "The path field is required."}, status=422)

        try:
            services.delete_file(path)
        except InvalidPathError as e:
            return JsonResponse({"error": str(e)}, status=403)
        except StoredFileNotFoundError as e:
            return JsonResponse({"error": str(e)}, status=404)

        return JsonResponse({"success": True})

    def delete(self, request):
        return self.post(request)
