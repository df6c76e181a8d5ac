from django.shortcuts import render

from logspec.filter import run_filter
from logspec.ingest import IngestError, parse_excel_file
from logspec.store import MatrixLoadError, MatrixStore

from .forms import LogspecUploadForm

# One active matrix per process (default until a custom one is uploaded)
_STORE = MatrixStore()


def get_store():
    """Active matrix store; the default matrix loads on first access"""
    return _STORE


def _apply_matrix_choice(store, cleaned):
    if cleaned.get('reset_default'):
        store.reset_to_default()
    elif cleaned.get('matrix_file'):
        upload = cleaned['matrix_file']
        store.load_bytes(upload.read(), upload.name)


def filter_view(request):
    """Upload a data file (and optionally a matrix) and show logspec lines"""
    store = get_store()
    results = None
    error_msg = None

    if request.method == 'POST':
        form = LogspecUploadForm(request.POST, request.FILES)
        if form.is_valid():
            try:
                _apply_matrix_choice(store, form.cleaned_data)
                lookup = store.current
                rows = parse_excel_file(form.cleaned_data['data_file'])
                result = run_filter(rows, lookup)
                df = result.to_frame()
                results = {
                    'summary': result.summary(),
                    'count': result.count,
                    'total': result.total,
                    'columns': list(df.columns),
                    'rows': df.values.tolist(),
                }
            except (IngestError, MatrixLoadError) as e:
                error_msg = str(e)
    else:
        form = LogspecUploadForm()

    try:
        matrix_summary = store.summary()
    except MatrixLoadError as e:
        matrix_summary = None
        error_msg = error_msg or str(e)

    return render(request, 'filter.html', {
        'form': form,
        'results': results,
        'matrix_summary': matrix_summary,
        'error_msg': error_msg
    })
